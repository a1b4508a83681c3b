"""Mapping document parse errors.

Every error raised while parsing a mapping document carries a
`ParseErrorKind`, a detail string and, when the failure belongs to one
entry, the index of that entry in the array. All of them are recoverable:
the caller keeps its previous mapping table and shows the message.
"""

from enum import Enum
from typing import Optional

from .base import LaunchMapperError


class ParseErrorKind(str, Enum):
    """Categories of mapping document failures."""

    MALFORMED_JSON = "MalformedJSON"
    NOT_AN_ARRAY = "NotAnArray"
    MISSING_KEY = "MissingKey"
    UNKNOWN_TYPE = "UnknownType"
    INVALID_FIELD_FOR_TYPE = "InvalidFieldForType"
    INVALID_NOTE_NAME = "InvalidNoteName"
    INVALID_FINGERING_KEY = "InvalidFingeringKey"


class MappingParseError(LaunchMapperError):
    """Base class for mapping document parse failures."""

    kind: ParseErrorKind

    def __init__(self, detail: str, index: Optional[int] = None):
        """
        Initialize a mapping parse error.

        Args:
            detail: What was wrong
            index: Position of the offending entry in the array, if any
        """
        location = f"entry {index}: " if index is not None else ""
        super().__init__(
            user_message=f"{location}{detail}",
            technical_message=f"{self.kind.value} at {location or 'document: '}{detail}",
            recoverable=True,
            recovery_hint=(
                'Each entry needs "k" (pad number) and "type" (note, pitch, timbre or sax) '
                'plus the fields of that type'
            ),
        )
        self.detail = detail
        self.index = index


class MalformedJSONError(MappingParseError):
    """The document is not valid JSON."""

    kind = ParseErrorKind.MALFORMED_JSON


class NotAnArrayError(MappingParseError):
    """The top-level JSON value is not an array."""

    kind = ParseErrorKind.NOT_AN_ARRAY


class MissingKeyError(MappingParseError):
    """An entry has no integer `k` field."""

    kind = ParseErrorKind.MISSING_KEY


class UnknownTypeError(MappingParseError):
    """An entry's `type` is not note, pitch, timbre or sax."""

    kind = ParseErrorKind.UNKNOWN_TYPE


class InvalidFieldForTypeError(MappingParseError):
    """A type-specific or color field is missing or has the wrong kind of value."""

    kind = ParseErrorKind.INVALID_FIELD_FOR_TYPE


class InvalidNoteNameError(MappingParseError):
    """A pitch class name is not one of the twelve note names."""

    kind = ParseErrorKind.INVALID_NOTE_NAME


class InvalidFingeringKeyError(MappingParseError):
    """A fingering key name is not recognised."""

    kind = ParseErrorKind.INVALID_FINGERING_KEY
