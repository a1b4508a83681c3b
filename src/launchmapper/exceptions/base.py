"""Root of the launchmapper error hierarchy.

Each error carries two renderings: a short line for the terminal
(``user_message``) and a longer one for the log (``technical_message``).
Errors the user can fix by editing a file are marked ``recoverable`` and
may carry a ``recovery_hint`` that the CLI prints under the message.
"""

from typing import Optional


class LaunchMapperError(Exception):
    """Any error raised on purpose by launchmapper."""

    def __init__(
        self,
        user_message: str,
        *,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        # Falls back to the short line when the caller has nothing more to log
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """Message followed by the hint, ready to print."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
