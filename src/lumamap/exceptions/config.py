"""Errors raised while reading config and project files."""

from typing import Any

from .base import LumaMapError

# Extra advice keyed by a word in the failing field's path
_FIELD_HINTS = (
    ("channel", "Channel filter must be 0 (omni) or 1-16"),
    ("note", "Note numbers must be between 0 and 127"),
    ("intensity", "base_intensity must be above 0 and at most 1"),
    ("port", "Run 'lumamap midi list' to see valid MIDI inputs"),
)


class ConfigurationError(LumaMapError):
    """A config or project file is invalid or cannot be loaded."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """The file is not valid JSON (or is empty)."""

    def __init__(self, file_path: str, parse_error: str):
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_msg = "File has a trailing comma"
            recovery = (
                f"Remove the trailing comma from {file_path}\n"
                "JSON doesn't allow a comma after the last item of an object or array"
            )
        else:
            user_msg = "File is empty" if "empty" in lowered else "File has invalid syntax"
            recovery = (
                f"Fix {file_path} by hand or restore {file_path}.bak\n"
                "Look for missing quotes and unclosed braces or brackets"
            )

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A value in the file has the wrong type or is out of range."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: str | None = None):
        """
        Args:
            field: Dotted path of the failing field ("regions.0.channel_filter")
            value: The rejected value
            error_msg: Validator message
            file_path: File the value came from, if any
        """
        hint_lines = [f"Update the '{field}' value"]
        if file_path:
            hint_lines.append(f"File: {file_path}")
        hint_lines.extend(hint for word, hint in _FIELD_HINTS if word in field.lower())

        super().__init__(
            user_message=f"Invalid value for '{field}': {error_msg}",
            technical_message=f"Validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint="\n".join(hint_lines),
        )
        self.field = field
        self.value = value
        self.error_msg = error_msg
        self.file_path = file_path


class ProjectFileError(LumaMapError):
    """A project file is missing or cannot be opened."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            user_message=f"Could not open project: {reason}",
            technical_message=f"Failed to load project from {file_path}: {reason}",
            recoverable=True,
            recovery_hint=f"Check that {file_path} is a LumaMap project (.json) file",
        )
        self.file_path = file_path
        self.reason = reason
