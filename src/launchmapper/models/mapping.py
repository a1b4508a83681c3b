"""Pad mappings: the action a pad triggers.

A mapping is a closed sum of four cases, discriminated by ``type``:

- ``NoteMapping``: play a note
- ``PitchBendMapping``: bend the pitch while held
- ``TimbreMapping``: switch the oscillator waveform
- ``FingeringMapping``: act as one key of a saxophone fingering

The ``type`` values match the ones used in mapping documents.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .color import ColorPair
from .enums import FingeringKey, Waveform
from .notes import format_note


class NoteMapping(BaseModel):
    """Play a note."""

    model_config = ConfigDict(frozen=True)

    type: Literal["note"] = "note"
    target: int = Field(description="Note number to play")

    def describe(self) -> str:
        return format_note(self.target)


class PitchBendMapping(BaseModel):
    """Bend the pitch by a fixed amount while held."""

    model_config = ConfigDict(frozen=True)

    type: Literal["pitch"] = "pitch"
    bend: int = Field(description="Bend amount, summed over held pitch pads")

    def describe(self) -> str:
        return f"bend {self.bend:+d}"


class TimbreMapping(BaseModel):
    """Switch the oscillator waveform."""

    model_config = ConfigDict(frozen=True)

    type: Literal["timbre"] = "timbre"
    waveform: Waveform = Field(description="Waveform selected on press")

    def describe(self) -> str:
        return self.waveform.value


class FingeringMapping(BaseModel):
    """Act as one key of the saxophone fingering."""

    model_config = ConfigDict(frozen=True)

    type: Literal["sax"] = "sax"
    key: FingeringKey = Field(description="Fingering key this pad holds")

    def describe(self) -> str:
        return self.key.value


Mapping = Annotated[
    Union[NoteMapping, PitchBendMapping, TimbreMapping, FingeringMapping],
    Field(discriminator="type"),
]


class MappingEntry(BaseModel):
    """A pad's mapping together with its colors."""

    model_config = ConfigDict(frozen=True)

    mapping: Mapping
    color: ColorPair = Field(default_factory=ColorPair.neutral)

    def with_color(self, color: ColorPair) -> "MappingEntry":
        """Copy with different colors, same mapping."""
        return MappingEntry(mapping=self.mapping, color=color)
