"""Errors raised while loading the JSON settings file."""

from typing import Any, Optional

from .base import LaunchMapperError


class ConfigurationError(LaunchMapperError):
    """Settings could not be loaded or are unusable."""


class ConfigFileInvalidError(ConfigurationError):
    """The settings file is not a JSON document pydantic can read."""

    def __init__(self, file_path: str, parse_error: str):
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_msg = "Configuration file has a trailing comma"
            recovery = f"Delete the comma before the closing bracket or brace in {file_path}"
        else:
            user_msg = (
                "Configuration file has a syntax error"
                if "expecting" in lowered
                else "Configuration file has invalid syntax"
            )
            recovery = (
                f"Open {file_path} in a JSON-aware editor and look for stray commas, "
                "unquoted keys or an unclosed bracket, or delete the file to fall back to defaults"
            )

        super().__init__(
            user_msg,
            technical_message=f"Cannot read settings from {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.file_path = file_path
        self.parse_error = parse_error


def _field_hint(field: str) -> Optional[str]:
    name = field.lower()
    if any(word in name for word in ("color", "rest", "pressed")):
        return "pad colors are palette indices from 0 to 127"
    if "octave" in name:
        return "octaves are numbered with C4 = 60 and must lie between -1 and 9"
    if "grid" in name:
        return "the grid is either 8 or 9 pads wide"
    return None


class ConfigValidationError(ConfigurationError):
    """A settings value has the right JSON shape but an unusable value."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: str | None = None):
        where = f" in {file_path}" if file_path else ""
        recovery = f"Fix '{field}'{where}"
        hint = _field_hint(field)
        if hint:
            recovery += f"; {hint}"

        super().__init__(
            f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"Setting {field}={value!r} rejected: {error_msg}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.field = field
        self.value = value
        self.file_path = file_path
