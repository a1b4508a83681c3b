"""
Custom exception hierarchy for LaunchMapper.

## Exception Hierarchy

```
LaunchMapperError (base)
├── NoteError
│   └── InvalidNoteFormatError
├── MappingParseError
│   ├── MalformedJSONError
│   ├── NotAnArrayError
│   ├── MissingKeyError
│   ├── UnknownTypeError
│   ├── InvalidFieldForTypeError
│   ├── InvalidNoteNameError
│   └── InvalidFingeringKeyError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions inherit from `LaunchMapperError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

### Example: Rejecting a mapping document

```python
from launchmapper import serialization
from launchmapper.exceptions import MappingParseError

try:
    table = serialization.parse(text)
except MappingParseError as e:
    # Keep the previous table, show what went wrong
    print(e.kind.value, e.user_message)
```
"""

from .base import LaunchMapperError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    ErrorCollector,
    collect_errors,
    format_error_for_display,
    wrap_pydantic_error,
)
from .mapping import (
    InvalidFieldForTypeError,
    InvalidFingeringKeyError,
    InvalidNoteNameError,
    MalformedJSONError,
    MappingParseError,
    MissingKeyError,
    NotAnArrayError,
    ParseErrorKind,
    UnknownTypeError,
)
from .notes import InvalidNoteFormatError, NoteError

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Handlers
    "ErrorCollector",
    # Mapping documents
    "InvalidFieldForTypeError",
    "InvalidFingeringKeyError",
    # Notes
    "InvalidNoteFormatError",
    "InvalidNoteNameError",
    # Base
    "LaunchMapperError",
    "MalformedJSONError",
    "MappingParseError",
    "MissingKeyError",
    "NotAnArrayError",
    "NoteError",
    "ParseErrorKind",
    "UnknownTypeError",
    "collect_errors",
    "format_error_for_display",
    "wrap_pydantic_error",
]
