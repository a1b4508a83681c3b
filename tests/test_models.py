"""Tests for mapping models, the mapping table and the color scheme."""

import pytest
from pydantic import ValidationError

from launchmapper.models import (
    ColorPair,
    ColorScheme,
    FingeringKey,
    FingeringMapping,
    MappingEntry,
    MappingTable,
    NoteMapping,
    PitchBendMapping,
    TimbreMapping,
    Waveform,
)


@pytest.mark.unit
class TestColorPair:
    """Test ColorPair model."""

    def test_valid(self):
        pair = ColorPair(rest=0x03, pressed=0x24)
        assert pair.for_state(False) == 0x03
        assert pair.for_state(True) == 0x24

    def test_out_of_range(self):
        with pytest.raises(ValidationError):
            ColorPair(rest=128, pressed=0)
        with pytest.raises(ValidationError):
            ColorPair(rest=0, pressed=-1)

    def test_neutral(self):
        assert ColorPair.neutral() == ColorPair(rest=0, pressed=0)

    def test_hex_codes(self):
        assert ColorPair(rest=0x4E, pressed=0x15).to_hex_codes() == ("4E", "15")


@pytest.mark.unit
class TestMappings:
    """Test the mapping union."""

    def test_entry_validates_discriminated_union(self):
        entry = MappingEntry.model_validate({"mapping": {"type": "sax", "key": "G♯"}})
        assert entry.mapping == FingeringMapping(key=FingeringKey.G_SHARP)
        assert entry.color == ColorPair.neutral()

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            MappingEntry.model_validate({"mapping": {"type": "drum"}})

    def test_mappings_are_frozen(self):
        mapping = NoteMapping(target=60)
        with pytest.raises(ValidationError):
            mapping.target = 61

    def test_describe(self):
        assert NoteMapping(target=61).describe() == "C#4"
        assert PitchBendMapping(bend=-2).describe() == "bend -2"
        assert TimbreMapping(waveform=Waveform.SINE).describe() == "sine"
        assert FingeringMapping(key=FingeringKey.LOW_B_FLAT).describe() == "Low B♭"


@pytest.mark.unit
class TestFingeringKeyLookup:
    """Test lenient fingering key name lookup."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Low B♭", FingeringKey.LOW_B_FLAT),
            ("low bb", FingeringKey.LOW_B_FLAT),
            ("G#", FingeringKey.G_SHARP),
            ("g♯", FingeringKey.G_SHARP),
            ("  oct 2 ", FingeringKey.OCTAVE_2),
            ("B", FingeringKey.B),
            ("b", FingeringKey.B),
            ("Bb bis", FingeringKey.B_FLAT_BIS),
            ("play", FingeringKey.PLAY),
        ],
    )
    def test_lookup(self, name, expected):
        assert FingeringKey.lookup(name) == expected

    def test_unknown(self):
        assert FingeringKey.lookup("Z") is None

    def test_key_groups(self):
        assert FingeringKey.B.is_main
        assert not FingeringKey.G_SHARP.is_main
        assert FingeringKey.OCTAVE_3.is_octave
        assert FingeringKey.PLAY.is_control
        assert not FingeringKey.PLAY.is_octave


@pytest.mark.unit
class TestMappingTable:
    """Test copy-on-write table edits."""

    @pytest.fixture
    def table(self):
        return (
            MappingTable.empty()
            .set_mapping(12, NoteMapping(target=62), ColorPair(rest=1, pressed=2))
            .set_mapping(11, NoteMapping(target=60), ColorPair(rest=3, pressed=4))
        )

    def test_get(self, table):
        assert table.get(11).mapping == NoteMapping(target=60)
        assert table.get(99) is None

    def test_keys_sorted(self, table):
        assert table.keys() == [11, 12]
        assert [key for key, _ in table.items()] == [11, 12]

    def test_len_and_contains(self, table):
        assert len(table) == 2
        assert 11 in table
        assert 13 not in table

    def test_set_mapping_new_key_is_neutral(self, table):
        updated = table.set_mapping(13, NoteMapping(target=64))
        assert updated.get(13).color == ColorPair.neutral()

    def test_set_mapping_keeps_existing_color(self, table):
        updated = table.set_mapping(11, PitchBendMapping(bend=1))
        assert updated.get(11).mapping == PitchBendMapping(bend=1)
        assert updated.get(11).color == ColorPair(rest=3, pressed=4)

    def test_set_mapping_with_color(self, table):
        updated = table.set_mapping(11, NoteMapping(target=61), ColorPair(rest=9, pressed=10))
        assert updated.get(11).color == ColorPair(rest=9, pressed=10)

    def test_edits_leave_original_untouched(self, table):
        table.set_mapping(11, NoteMapping(target=72))
        table.set_color(12, ColorPair(rest=0, pressed=0))
        table.remove(11)
        assert table.get(11).mapping == NoteMapping(target=60)
        assert table.get(12).color == ColorPair(rest=1, pressed=2)
        assert len(table) == 2

    def test_unchanged_entries_are_shared(self, table):
        updated = table.set_color(11, ColorPair(rest=0, pressed=0))
        assert updated.get(12) is table.get(12)

    def test_set_color_absent_key(self, table):
        with pytest.raises(KeyError):
            table.set_color(99, ColorPair.neutral())

    def test_remove(self, table):
        assert table.remove(11).keys() == [12]
        assert table.remove(99) is table

    def test_keys_where(self, table):
        table = table.set_mapping(13, FingeringMapping(key=FingeringKey.B))
        assert table.keys_where(lambda m: isinstance(m, NoteMapping)) == [11, 12]

    def test_value_equality(self, table):
        same = (
            MappingTable.empty()
            .set_mapping(11, NoteMapping(target=60), ColorPair(rest=3, pressed=4))
            .set_mapping(12, NoteMapping(target=62), ColorPair(rest=1, pressed=2))
        )
        assert same == table
        assert same.set_color(11, ColorPair.neutral()) != table

    def test_entries_view_is_read_only(self, table):
        with pytest.raises(TypeError):
            table.entries[13] = table.get(11)
        assert 13 not in table

    def test_from_entries_copies_the_dict(self, table):
        source = dict(table.items())
        built = MappingTable.from_entries(source)
        source[13] = table.get(11)
        del source[11]
        assert built.keys() == [11, 12]
        assert built == table


@pytest.mark.unit
class TestColorScheme:
    """Test the default color rule."""

    def test_white_and_black_notes(self):
        scheme = ColorScheme()
        assert scheme.color_for(NoteMapping(target=60)) == ColorPair(rest=0x00, pressed=0x25)
        assert scheme.color_for(NoteMapping(target=61)) == ColorPair(rest=0x03, pressed=0x24)

    def test_single_color(self):
        scheme = ColorScheme(single_color=True)
        assert scheme.color_for(NoteMapping(target=61)) == ColorPair(rest=0x00, pressed=0x25)
        assert scheme.color_for(FingeringMapping(key=FingeringKey.OCTAVE_1)) == ColorPair(
            rest=0x23, pressed=0x27
        )

    def test_fingering_keys(self):
        scheme = ColorScheme()
        assert scheme.color_for(FingeringMapping(key=FingeringKey.B)) == ColorPair(
            rest=0x23, pressed=0x27
        )
        assert scheme.color_for(FingeringMapping(key=FingeringKey.ALT_B_FLAT)) == ColorPair(
            rest=0x74, pressed=0x77
        )

    def test_other_mappings(self):
        scheme = ColorScheme()
        assert scheme.color_for(PitchBendMapping(bend=1)) == ColorPair(rest=0x00, pressed=0x25)
        assert scheme.color_for(TimbreMapping(waveform=Waveform.SINE)) == ColorPair(
            rest=0x00, pressed=0x25
        )
