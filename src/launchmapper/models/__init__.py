"""Data models for the pad mapper."""

from .color import NEUTRAL_COLOR, ColorPair
from .config import AppConfig, ColorScheme, IsomorphicSettings, SoundSettings
from .enums import FingeringKey, GridSize, ShowSameNote, Waveform
from .mapping import (
    FingeringMapping,
    Mapping,
    MappingEntry,
    NoteMapping,
    PitchBendMapping,
    TimbreMapping,
)
from .notes import (
    NoteName,
    NoteRepr,
    format_note,
    is_black_key,
    note_to_repr,
    parse_note_name,
    parse_note_text,
    repr_to_note,
)
from .table import MappingTable

__all__ = [
    "NEUTRAL_COLOR",
    # Config
    "AppConfig",
    "ColorPair",
    "ColorScheme",
    # Enums
    "FingeringKey",
    # Mappings
    "FingeringMapping",
    "GridSize",
    "IsomorphicSettings",
    "Mapping",
    "MappingEntry",
    "MappingTable",
    "NoteMapping",
    # Notes
    "NoteName",
    "NoteRepr",
    "PitchBendMapping",
    "ShowSameNote",
    "SoundSettings",
    "TimbreMapping",
    "Waveform",
    "format_note",
    "is_black_key",
    "note_to_repr",
    "parse_note_name",
    "parse_note_text",
    "repr_to_note",
]
