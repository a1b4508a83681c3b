"""Note numbers, note names and the conversions between them.

Notes are MIDI note numbers. Octaves follow the convention where middle C
(note 60) is C4, i.e. ``octave = note // 12 - 1``.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from launchmapper.exceptions import InvalidNoteFormatError, InvalidNoteNameError

MIN_NOTE = 0
MAX_NOTE = 127
MAX_TEXT_OCTAVE = 9


class NoteName(str, Enum):
    """The twelve pitch classes, spelled with sharps."""

    C = "C"
    C_SHARP = "C#"
    D = "D"
    D_SHARP = "D#"
    E = "E"
    F = "F"
    F_SHARP = "F#"
    G = "G"
    G_SHARP = "G#"
    A = "A"
    A_SHARP = "A#"
    B = "B"

    @property
    def semitone(self) -> int:
        """Semitones above C (0-11)."""
        return NOTE_NAMES.index(self)

    @property
    def is_black(self) -> bool:
        """True for the five sharp pitch classes."""
        return self.value.endswith("#")


NOTE_NAMES: tuple[NoteName, ...] = tuple(NoteName)

# Flat spellings normalise to the enharmonic sharp
_NAME_TABLE: dict[str, NoteName] = {name.value: name for name in NoteName} | {
    "Db": NoteName.C_SHARP,
    "Eb": NoteName.D_SHARP,
    "Gb": NoteName.F_SHARP,
    "Ab": NoteName.G_SHARP,
    "Bb": NoteName.A_SHARP,
}

_NOTE_TEXT = re.compile(r"^([A-G][#b]?)\s*([0-9]+)$")


class NoteRepr(BaseModel):
    """A note as pitch class plus octave."""

    model_config = ConfigDict(frozen=True)

    name: NoteName = Field(description="Pitch class")
    octave: int = Field(description="Octave number (C4 = middle C)")

    def __str__(self) -> str:
        return f"{self.name.value}{self.octave}"


def note_to_repr(note: int) -> NoteRepr:
    """Split a note number into pitch class and octave."""
    return NoteRepr(name=NOTE_NAMES[note % 12], octave=note // 12 - 1)


def repr_to_note(note_repr: NoteRepr) -> int:
    """Convert a pitch class and octave back to a note number.

    No clamping is applied; results outside 0-127 are the caller's concern.
    """
    return (note_repr.octave + 1) * 12 + note_repr.name.semitone


def lookup_note_name(text: str) -> NoteName | None:
    """Find a pitch class by name, accepting flat spellings. None if unknown."""
    return _NAME_TABLE.get(text)


def parse_note_name(text: str) -> NoteName:
    """
    Parse a pitch class name such as ``"C"``, ``"F#"`` or ``"Bb"``.

    Raises:
        InvalidNoteNameError: If the name is not one of the twelve pitch classes
    """
    name = lookup_note_name(text)
    if name is None:
        raise InvalidNoteNameError(f"Invalid note name {text!r}")
    return name


def parse_note_text(text: str) -> int:
    """
    Parse note text such as ``"C4"``, ``"F#3"`` or ``"Bb2"`` into a note number.

    Flats are normalised to the enharmonic sharp. The octave must be 0-9.

    Raises:
        InvalidNoteFormatError: If the text does not describe a note
    """
    match = _NOTE_TEXT.match(text.strip())
    if not match:
        raise InvalidNoteFormatError(text)

    name_text, octave_text = match.groups()
    name = lookup_note_name(name_text)
    if name is None:
        raise InvalidNoteFormatError(text, f"{name_text!r} is not a pitch class")

    octave = int(octave_text)
    if octave > MAX_TEXT_OCTAVE:
        raise InvalidNoteFormatError(text, f"octave must be between 0 and {MAX_TEXT_OCTAVE}")

    return repr_to_note(NoteRepr(name=name, octave=octave))


def format_note(note: int) -> str:
    """Format a note number as name and octave, e.g. ``60 -> "C4"``."""
    return str(note_to_repr(note))


def is_black_key(note: int) -> bool:
    """True if the note falls on a black piano key."""
    return NOTE_NAMES[note % 12].is_black


def is_valid_note(note: int) -> bool:
    """True if the note number is within the MIDI range."""
    return MIN_NOTE <= note <= MAX_NOTE
