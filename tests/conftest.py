"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import Mock

import pytest

from launchmapper.core import FingeringResolver
from launchmapper.models import (
    AppConfig,
    ColorPair,
    FingeringKey,
    FingeringMapping,
    MappingEntry,
    MappingTable,
    NoteMapping,
    PitchBendMapping,
    TimbreMapping,
    Waveform,
)

# Distinct rest/pressed colors make light assertions readable
REST = 0x01
PRESSED = 0x05
COLORS = ColorPair(rest=REST, pressed=PRESSED)


def make_table(mappings: dict) -> MappingTable:
    """Build a table where every pad uses the REST/PRESSED test colors."""
    return MappingTable.from_entries(
        {key: MappingEntry(mapping=mapping, color=COLORS) for key, mapping in mappings.items()}
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def resolver():
    """Fingering resolver with the default combos and base octave 4."""
    return FingeringResolver()


@pytest.fixture
def config():
    """Default application configuration."""
    return AppConfig()


@pytest.fixture
def note_table():
    """Pads 11 and 12 both play C4, 13 plays C5, 14 plays D4."""
    return make_table({
        11: NoteMapping(target=60),
        12: NoteMapping(target=60),
        13: NoteMapping(target=72),
        14: NoteMapping(target=62),
    })


@pytest.fixture
def mixed_table():
    """One pad of every mapping type."""
    return make_table({
        11: NoteMapping(target=60),
        21: PitchBendMapping(bend=2),
        22: PitchBendMapping(bend=-1),
        31: TimbreMapping(waveform=Waveform.SINE),
        32: TimbreMapping(waveform=Waveform.SQUARE),
        41: FingeringMapping(key=FingeringKey.B),
    })


@pytest.fixture
def sound_observer():
    """Mock SoundObserver."""
    return Mock()


@pytest.fixture
def light_observer():
    """Mock LightObserver."""
    return Mock()
