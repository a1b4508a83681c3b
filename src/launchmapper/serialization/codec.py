"""Mapping document codec.

A mapping document is a JSON array with one object per mapped pad::

    [
      { "k": 36, "type": "note",   "n": "C", "o": 4, "r": 0, "p": 37 },
      { "k": 37, "type": "sax",    "s": "G♯", "r": 35, "p": 39 },
      { "k": 38, "type": "pitch",  "b": -2, "r": 0, "p": 37 },
      { "k": 39, "type": "timbre", "w": "sine", "r": 0, "p": 37 }
    ]

``r`` and ``p`` (rest and pressed colors) are optional when parsing and
default to the neutral color. ``format`` always writes them.
"""

import json
import logging
from pathlib import Path
from typing import Any

from launchmapper.exceptions import (
    InvalidFieldForTypeError,
    InvalidFingeringKeyError,
    InvalidNoteNameError,
    MalformedJSONError,
    MissingKeyError,
    NotAnArrayError,
    UnknownTypeError,
)
from launchmapper.models import (
    NEUTRAL_COLOR,
    ColorPair,
    FingeringKey,
    FingeringMapping,
    Mapping,
    MappingEntry,
    MappingTable,
    NoteMapping,
    NoteRepr,
    PitchBendMapping,
    TimbreMapping,
    Waveform,
    note_to_repr,
    repr_to_note,
)
from launchmapper.models.color import MAX_COLOR, MIN_COLOR
from launchmapper.models.notes import lookup_note_name

logger = logging.getLogger(__name__)

MAPPING_TYPES = ("note", "pitch", "timbre", "sax")
_WAVEFORMS = {waveform.value: waveform for waveform in Waveform}


def _as_int(value: Any) -> int | None:
    """JSON number with an integral value, or None. Booleans are not numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    return "number"


# =================================================================
# Parsing
# =================================================================


def _check_fields(type_name: str, raw: dict[str, Any], index: int) -> None:
    """Check the shape of the type-specific fields."""
    if type_name == "note":
        if not isinstance(raw.get("n"), str) or _as_int(raw.get("o")) is None:
            raise InvalidFieldForTypeError('note entry needs a string "n" and an integer "o"', index)
    elif type_name == "pitch":
        if _as_int(raw.get("b")) is None:
            raise InvalidFieldForTypeError('pitch entry needs an integer "b"', index)
    elif type_name == "timbre":
        waveform = raw.get("w")
        if not isinstance(waveform, str):
            raise InvalidFieldForTypeError('timbre entry needs a string "w"', index)
        if waveform not in _WAVEFORMS:
            raise InvalidFieldForTypeError(
                f"unknown waveform {waveform!r}, expected one of: {', '.join(_WAVEFORMS)}", index
            )
    elif type_name == "sax":
        if not isinstance(raw.get("s"), str):
            raise InvalidFieldForTypeError('sax entry needs a string "s"', index)


def _parse_color_field(raw: dict[str, Any], field: str, index: int) -> int:
    if field not in raw:
        return NEUTRAL_COLOR
    color = _as_int(raw[field])
    if color is None or not MIN_COLOR <= color <= MAX_COLOR:
        raise InvalidFieldForTypeError(
            f'"{field}" must be an integer between {MIN_COLOR} and {MAX_COLOR}, got {raw[field]!r}',
            index,
        )
    return color


def _build_mapping(type_name: str, raw: dict[str, Any], index: int) -> Mapping:
    """Resolve names into a mapping; field shapes are already checked."""
    if type_name == "note":
        name = lookup_note_name(raw["n"])
        if name is None:
            raise InvalidNoteNameError(f"invalid note name {raw['n']!r}", index)
        return NoteMapping(target=repr_to_note(NoteRepr(name=name, octave=_as_int(raw["o"]))))
    if type_name == "pitch":
        return PitchBendMapping(bend=_as_int(raw["b"]))
    if type_name == "timbre":
        return TimbreMapping(waveform=_WAVEFORMS[raw["w"]])

    key = FingeringKey.lookup(raw["s"])
    if key is None:
        raise InvalidFingeringKeyError(f"invalid fingering key {raw['s']!r}", index)
    return FingeringMapping(key=key)


def _parse_entry(raw: Any, index: int) -> tuple[int, MappingEntry]:
    if not isinstance(raw, dict):
        raise MissingKeyError(f"expected an object, got {_json_kind(raw)}", index)

    key = _as_int(raw.get("k"))
    if key is None:
        raise MissingKeyError('missing or non-integer "k"', index)

    type_name = raw.get("type")
    if type_name not in MAPPING_TYPES:
        raise UnknownTypeError(
            f"unknown type {type_name!r}, expected one of: {', '.join(MAPPING_TYPES)}", index
        )

    _check_fields(type_name, raw, index)
    color = ColorPair(
        rest=_parse_color_field(raw, "r", index),
        pressed=_parse_color_field(raw, "p", index),
    )
    return key, MappingEntry(mapping=_build_mapping(type_name, raw, index), color=color)


def parse(text: str) -> MappingTable:
    """
    Parse a mapping document.

    The whole document is validated before the table is built, so a
    failure never yields a partial table. When a pad appears twice the
    later entry wins.

    Raises:
        MappingParseError: The first problem found, as one of its subclasses
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedJSONError(f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e
    except RecursionError as e:
        raise MalformedJSONError("invalid JSON: nested too deeply") from e

    if not isinstance(document, list):
        raise NotAnArrayError(f"expected an array, got {_json_kind(document)}")

    entries: dict[int, MappingEntry] = {}
    for index, raw in enumerate(document):
        key, entry = _parse_entry(raw, index)
        if key in entries:
            logger.debug(f"Entry {index} overrides earlier mapping of pad {key}")
        entries[key] = entry

    logger.debug(f"Parsed mapping document: {len(document)} entries, {len(entries)} pads")
    return MappingTable.from_entries(entries)


# =================================================================
# Formatting
# =================================================================


def _dump(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _entry_fields(entry: MappingEntry) -> tuple[str, str | None, list[str]]:
    """Split an entry into its type field, its ``n`` field (notes only) and the rest."""
    mapping = entry.mapping
    type_field = f'"type": {_dump(mapping.type)},'
    name_field = None

    if isinstance(mapping, NoteMapping):
        note = note_to_repr(mapping.target)
        name_field = f'"n": {_dump(note.name.value)},'
        fields = [f'"o": {note.octave},']
    elif isinstance(mapping, PitchBendMapping):
        fields = [f'"b": {mapping.bend},']
    elif isinstance(mapping, TimbreMapping):
        fields = [f'"w": {_dump(mapping.waveform.value)},']
    elif isinstance(mapping, FingeringMapping):
        fields = [f'"s": {_dump(mapping.key.value)},']
    else:
        raise TypeError(f"Unknown mapping type: {type(mapping).__name__}")

    fields += [f'"r": {entry.color.rest},', f'"p": {entry.color.pressed}']
    return type_field, name_field, fields


def format(table: MappingTable) -> str:
    """
    Format a table as a mapping document, one entry per line sorted by pad.

    The ``type`` and ``n`` fields are padded so the columns line up.
    """
    if not len(table):
        return "[]"

    rows = [(key, *_entry_fields(entry)) for key, entry in table.items()]
    type_width = max(len(type_field) for _, type_field, _, _ in rows)
    name_width = max((len(name) for _, _, name, _ in rows if name is not None), default=0)

    lines = []
    for key, type_field, name_field, fields in rows:
        parts = [f'"k": {key},', type_field.ljust(type_width)]
        if name_field is not None:
            parts.append(name_field.ljust(name_width))
        parts += fields
        lines.append("  { " + " ".join(parts) + " }")

    return "[\n" + ",\n".join(lines) + "\n]"


# =================================================================
# Files
# =================================================================


def load(path: Path) -> MappingTable:
    """
    Read and parse a mapping document (UTF-8).

    Raises:
        MappingParseError: If the document is invalid or not UTF-8
        OSError: If the file cannot be read
    """
    logger.info(f"Loading mapping table from {path}")
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedJSONError(f"not UTF-8 text: invalid byte at position {e.start}") from e
    return parse(text)


def dump(table: MappingTable, path: Path) -> None:
    """Format a table and write it to ``path`` (UTF-8), creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format(table) + "\n", encoding="utf-8")
    logger.info(f"Saved {len(table)} mapping(s) to {path}")
