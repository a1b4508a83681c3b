"""Saxophone-style fingering resolution.

A fingering is the set of fingering keys currently held. Each combo names
the keys it requires and the note it produces. Combos are tried from the
highest priority down and the first one whose required keys are all held
wins, so more specific combos must carry higher priorities than the more
general combos they contain. Combos with equal priority keep their
declaration order.

Combo results are relative: the resolver adds its base octave plus one
octave per held octave key (``Oct 1``, ``Oct 2`` and ``Oct 3`` stack).
Control keys (octave keys and ``Play``) never take part in matching.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from itertools import combinations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from launchmapper.models.enums import FingeringKey
from launchmapper.models.notes import NoteName, NoteRepr, is_valid_note, repr_to_note

logger = logging.getLogger(__name__)

DEFAULT_BASE_OCTAVE = 4

HeldKeys = Mapping[FingeringKey, int] | Iterable[FingeringKey]


class Combo(BaseModel):
    """A set of required fingering keys and the note it produces."""

    model_config = ConfigDict(frozen=True)

    required_keys: frozenset[FingeringKey] = Field(description="Keys that must all be held")
    result: NoteRepr = Field(description="Resulting note, octave relative to the base octave")
    priority: int = Field(description="Higher priorities are tried first")

    @field_validator("required_keys")
    @classmethod
    def validate_no_control_keys(cls, v: frozenset[FingeringKey]) -> frozenset[FingeringKey]:
        """Control keys shift or gate the result, they never select it."""
        control = sorted(key.value for key in v if key.is_control)
        if control:
            raise ValueError(f"Control keys cannot be required by a combo: {', '.join(control)}")
        return v

    def matches(self, keys: frozenset[FingeringKey] | set[FingeringKey]) -> bool:
        """True if every required key is among ``keys``."""
        return self.required_keys <= keys

    def __str__(self) -> str:
        keys = " ".join(key.value for key in sorted(self.required_keys, key=_KEY_ORDER.index)) or "(none)"
        return f"[{keys}] -> {self.result} (priority {self.priority})"


_KEY_ORDER: list[FingeringKey] = list(FingeringKey)


def _combo(keys: str, name: NoteName, octave: int, priority: int) -> Combo:
    required = frozenset(FingeringKey(part) for part in keys.split(",") if part)
    return Combo(required_keys=required, result=NoteRepr(name=name, octave=octave), priority=priority)


DEFAULT_COMBOS: tuple[Combo, ...] = (
    _combo("B,A,G,F,E,D,C,Low B♭", NoteName.A_SHARP, -1, 82),
    _combo("B,A,G,F,E,D,C,Low B", NoteName.B, -1, 81),
    _combo("B,A,G,F,E,D,C,Low C♯", NoteName.C_SHARP, 0, 80),
    _combo("B,A,G,F,E,D,C", NoteName.C, 0, 71),
    _combo("B,A,G,F,E,D,D♯", NoteName.D_SHARP, 0, 70),
    _combo("B,A,G,F,E,D", NoteName.D, 0, 60),
    _combo("B,A,G,F,E", NoteName.E, 0, 51),
    _combo("B,A,G,F,F♯", NoteName.F_SHARP, 0, 50),
    _combo("B,A,G,F", NoteName.F, 0, 42),
    _combo("B,A,G,E", NoteName.F_SHARP, 0, 41),
    _combo("B,A,G,G♯", NoteName.G_SHARP, 0, 40),
    _combo("B,A,G", NoteName.G, 0, 31),
    _combo("B,A,Alt B♭", NoteName.A_SHARP, 0, 30),
    _combo("B,A", NoteName.A, 0, 24),
    _combo("B,B♭ bis", NoteName.A_SHARP, 0, 23),
    _combo("B,F", NoteName.A_SHARP, 0, 22),
    _combo("B,E", NoteName.A_SHARP, 0, 21),
    _combo("B,Alt C", NoteName.C, 1, 20),
    _combo("B", NoteName.B, 0, 11),
    _combo("A", NoteName.C, 1, 10),
    _combo("", NoteName.C_SHARP, 1, 0),
)


def held_fingering_keys(held: HeldKeys) -> frozenset[FingeringKey]:
    """
    Normalise a held-key view to the set of keys with a positive count.

    Accepts a mapping of key to count (such as an ``ActivityTracker``) or a
    plain iterable of held keys.
    """
    if hasattr(held, "items"):
        return frozenset(key for key, count in held.items() if count > 0)
    return frozenset(held)


def find_ambiguous_combos(combos: Sequence[Combo]) -> list[tuple[Combo, Combo]]:
    """
    Find pairs of equal-priority combos that can both win at once.

    Two combos with the same priority are ambiguous when holding the union
    of their keys satisfies both and no higher-priority combo is satisfied
    by that union. Resolution would then depend on declaration order alone.

    Returns:
        Ambiguous pairs, in declaration order
    """
    ambiguous = []
    for first, second in combinations(combos, 2):
        if first.priority != second.priority:
            continue
        union = first.required_keys | second.required_keys
        outranked = any(
            other.priority > first.priority and other.matches(union) for other in combos
        )
        if not outranked:
            ambiguous.append((first, second))
    return ambiguous


class FingeringResolver:
    """
    Turns held fingering keys into a note.

    Example:
        >>> resolver = FingeringResolver()
        >>> resolver.resolve({FingeringKey.B, FingeringKey.A, FingeringKey.G})
        67
    """

    def __init__(
        self,
        combos: Sequence[Combo] = DEFAULT_COMBOS,
        base_octave: int = DEFAULT_BASE_OCTAVE,
    ):
        """
        Args:
            combos: Combo table; must contain a combo with no required keys
            base_octave: Octave added to every combo result

        Raises:
            ValueError: If the table has no fallback combo
        """
        if not any(not combo.required_keys for combo in combos):
            raise ValueError("Combo table needs a fallback combo with no required keys")

        for first, second in find_ambiguous_combos(combos):
            logger.warning(
                f"Ambiguous fingering combos, declaration order decides: {first} / {second}"
            )

        # sorted() is stable, so equal priorities keep declaration order
        self._combos: tuple[Combo, ...] = tuple(sorted(combos, key=lambda c: -c.priority))
        self.base_octave = base_octave

    @property
    def combos(self) -> tuple[Combo, ...]:
        """Combos in the order they are tried."""
        return self._combos

    def match(self, held: HeldKeys) -> Combo:
        """Find the winning combo for the held keys (control keys ignored)."""
        playing = {key for key in held_fingering_keys(held) if not key.is_control}
        for combo in self._combos:
            if combo.matches(playing):
                return combo
        # Unreachable: the fallback combo matches every key set
        raise AssertionError("No fallback combo in fingering table")

    def octave_shift(self, held: HeldKeys) -> int:
        """Octaves added by held octave keys, one per distinct key."""
        return sum(1 for key in held_fingering_keys(held) if key.is_octave)

    def resolve_repr(self, held: HeldKeys) -> NoteRepr:
        """Resolve the held keys to an absolute pitch class and octave."""
        combo = self.match(held)
        octave = combo.result.octave + self.base_octave + self.octave_shift(held)
        return NoteRepr(name=combo.result.name, octave=octave)

    def resolve(self, held: HeldKeys) -> int | None:
        """
        Resolve the held keys to a note number.

        Returns:
            The note, or None if it falls outside the MIDI range
        """
        note = repr_to_note(self.resolve_repr(held))
        if not is_valid_note(note):
            logger.debug(f"Fingering resolves outside MIDI range: {note}")
            return None
        return note

    @staticmethod
    def is_gate_open(held: HeldKeys) -> bool:
        """True if the ``Play`` gate key is held."""
        return FingeringKey.PLAY in held_fingering_keys(held)
