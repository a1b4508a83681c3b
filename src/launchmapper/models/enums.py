"""Enumerations for the pad mapper."""

import re
from enum import Enum
from typing import Optional


class Waveform(str, Enum):
    """Oscillator shapes a timbre pad can select."""

    SINE = "sine"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"


class ShowSameNote(str, Enum):
    """Which note pads light up when a note sounds."""

    NO = "no"          # Only the pad that is physically held
    YES = "yes"        # Every pad mapped to the sounding note
    OCTAVE = "octave"  # Every pad mapped to the same pitch class, any octave


class GridSize(str, Enum):
    """Supported controller surfaces."""

    GRID_8X8 = "8x8"
    GRID_9X9 = "9x9"


_FLAT_AFTER_LETTER = re.compile(r"(?<=[A-Ga-g])b\b")


class FingeringKey(str, Enum):
    """Saxophone-style fingering keys.

    Values are the display names used in mapping documents.
    """

    # Main column, top to bottom
    B = "B"
    A = "A"
    G = "G"
    F = "F"
    E = "E"
    D = "D"
    C = "C"

    # Auxiliary keys
    B_FLAT_BIS = "B♭ bis"
    G_SHARP = "G♯"
    LOW_C_SHARP = "Low C♯"
    LOW_B_FLAT = "Low B♭"
    LOW_B = "Low B"
    D_SHARP = "D♯"
    F_SHARP = "F♯"
    ALT_B_FLAT = "Alt B♭"
    ALT_C = "Alt C"

    # Control keys
    OCTAVE_1 = "Oct 1"
    OCTAVE_2 = "Oct 2"
    OCTAVE_3 = "Oct 3"
    PLAY = "Play"

    @property
    def is_octave(self) -> bool:
        """True for the octave shifter keys."""
        return self in _OCTAVE_KEYS

    @property
    def is_control(self) -> bool:
        """True for keys that never take part in combo matching."""
        return self is FingeringKey.PLAY or self in _OCTAVE_KEYS

    @property
    def is_main(self) -> bool:
        """True for the seven main column keys."""
        return self in _MAIN_KEYS

    @classmethod
    def lookup(cls, name: str) -> Optional["FingeringKey"]:
        """Find a key by display name.

        Matching ignores case and surrounding whitespace, and accepts ASCII
        spellings: ``#`` for ``♯`` and ``b`` after a note letter for ``♭``.

        Example:
            >>> FingeringKey.lookup("low bb")
            <FingeringKey.LOW_B_FLAT: 'Low B♭'>
        """
        normalized = _FLAT_AFTER_LETTER.sub("♭", name.strip().replace("#", "♯")).casefold()
        return _KEYS_BY_FOLDED_NAME.get(normalized)


_OCTAVE_KEYS = frozenset({FingeringKey.OCTAVE_1, FingeringKey.OCTAVE_2, FingeringKey.OCTAVE_3})

_MAIN_KEYS = frozenset({
    FingeringKey.B,
    FingeringKey.A,
    FingeringKey.G,
    FingeringKey.F,
    FingeringKey.E,
    FingeringKey.D,
    FingeringKey.C,
})

_KEYS_BY_FOLDED_NAME: dict[str, FingeringKey] = {key.value.casefold(): key for key in FingeringKey}
