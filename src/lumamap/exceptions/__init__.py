"""
Custom exception hierarchy for LumaMap.

```
LumaMapError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── ProjectFileError
├── RegionNotFoundError
└── MidiPortError
```

All custom exceptions carry a `user_message`, a `technical_message` for logs,
a `recoverable` flag and an optional `recovery_hint`.

Bad MIDI bytes and inconsistent regions are not errors: the activation engine
degrades them to "no effect" and keeps running.
"""

from .base import LumaMapError
from .config import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    ProjectFileError,
)
from .handlers import (
    ErrorContext,
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
)
from .mapping import MidiPortError, RegionNotFoundError

__all__ = [
    # Base
    "LumaMapError",
    # Config
    "ConfigFileInvalidError",
    "ConfigurationError",
    "ConfigValidationError",
    "ProjectFileError",
    # Mapping
    "MidiPortError",
    "RegionNotFoundError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "handle_errors",
    "wrap_pydantic_error",
]
