"""Root of the LumaMap exception hierarchy."""

from typing import Optional


class LumaMapError(Exception):
    """
    Base class for every error LumaMap raises on purpose.

    Attributes:
        user_message: Short text the CLI shows
        technical_message: Detail for the log file (defaults to user_message)
        recoverable: Whether retrying after a fix can succeed
        recovery_hint: What the user can do about it, if anything
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if there is one."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
