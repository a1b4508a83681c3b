"""Note parsing exceptions."""

from .base import LaunchMapperError


class NoteError(LaunchMapperError):
    """A note could not be interpreted."""
    pass


class InvalidNoteFormatError(NoteError):
    """Note text does not match `<letter>[#|b]<octave>` with an octave of 0-9."""

    def __init__(self, text: str, reason: str = "expected a note like C4, F#3 or Bb2"):
        """
        Initialize invalid note format error.

        Args:
            text: The text that failed to parse
            reason: Why the text was rejected
        """
        super().__init__(
            user_message=f"Invalid note '{text}': {reason}",
            technical_message=f"Note text {text!r} rejected: {reason}",
            recoverable=True,
            recovery_hint="Use a pitch letter A-G, an optional # or b, then an octave 0-9 (e.g. C4)",
        )
        self.text = text
        self.reason = reason
