"""
Error handling helpers for the outer layers (files, ports, CLI).

```
CLI                 prints user_message + recovery_hint
   ↑ LumaMapError
services / app      translate low-level failures, add context
   ↑ OSError, ValidationError, mido/rtmidi errors
I/O                 raises whatever the library raises
```

| Pattern | Code |
|---------|------|
| Log and re-raise | `@handle_errors(operation_name="open project")` |
| Log, tell the user, fall back | `@handle_errors(operation_name="load", user_notification=echo, re_raise=False)` |
| Logged critical section | `with ErrorContext("start MIDI input"): ...` |

The activation engine and the interaction state machine do not use these:
bad MIDI bytes and odd regions are "no effect", never errors.
"""

import logging
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from pydantic import ValidationError

from .base import LumaMapError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)

R = TypeVar('R')


def handle_errors(
    *,
    operation_name: str,
    user_notification: Optional[Callable[[str], None]] = None,
    fallback_value: Any = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable[[Callable[..., R]], Callable[..., R]]:
    """
    Decorate a function so failures are logged (and optionally reported).

    Args:
        operation_name: What the function does, for the log ("open project")
        user_notification: Called with a display message on failure
        fallback_value: Returned instead of raising when re_raise is False
        re_raise: Propagate the exception after logging
        log_level: Level for the log record
    """
    def decorator(func: Callable[..., R]) -> Callable[..., R]:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if isinstance(e, LumaMapError):
                    logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")
                    message = e.get_full_message()
                else:
                    logger.log(log_level, f"Unexpected error during {operation_name}: {e}", exc_info=True)
                    message = f"Error: {e}"

                if user_notification:
                    user_notification(message)
                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


class ErrorContext:
    """
    Log the start, success or failure of a block.

    Example:
        ```python
        with ErrorContext("start MIDI input", re_raise=False) as ctx:
            manager.start()
        if ctx.error:
            ...
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val
        if isinstance(exc_val, LumaMapError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)
        return not self.re_raise


def _field_path(error: dict) -> str:
    return ".".join(str(part) for part in error.get("loc", ())) or "unknown"


def wrap_pydantic_error(error: ValidationError, file_path: str) -> LumaMapError:
    """
    Turn a pydantic ValidationError raised while loading `file_path` into a
    ConfigFileInvalidError (bad JSON) or ConfigValidationError (bad values).
    """
    errors = error.errors()

    syntax = next((e for e in errors if e.get("type") == "json_invalid"), None)
    if syntax is not None:
        detail = syntax.get("ctx", {}).get("error") or syntax.get("msg", "invalid JSON")
        return ConfigFileInvalidError(file_path, str(detail))

    if len(errors) == 1:
        only = errors[0]
        return ConfigValidationError(
            field=_field_path(only),
            value=only.get("input"),
            error_msg=only.get("msg", "validation failed"),
            file_path=file_path,
        )

    lines = [f"  - {_field_path(e)}: {e.get('msg', 'validation failed')}" for e in errors]
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(errors)} validation errors:\n" + "\n".join(lines),
        file_path=file_path,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Split an exception into (message, recovery hint or None) for the CLI.
    """
    if isinstance(error, LumaMapError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None
