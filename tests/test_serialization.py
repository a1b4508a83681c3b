"""Tests for the mapping document codec."""

import json

import pytest

from launchmapper import serialization
from launchmapper.core import generate_fingering_layout, regenerate_isomorphic
from launchmapper.exceptions import (
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
from launchmapper.models import (
    ColorPair,
    FingeringKey,
    FingeringMapping,
    MappingTable,
    NoteMapping,
    PitchBendMapping,
    TimbreMapping,
    Waveform,
)

EXAMPLE = """[
  { "k": 36, "type": "note", "n": "C", "o": 4, "r": 0, "p": 37 },
  { "k": 37, "type": "sax",  "s": "G♯" }
]"""


@pytest.mark.unit
class TestParse:
    """Test parsing valid documents."""

    def test_example(self):
        table = serialization.parse(EXAMPLE)
        assert table.get(36).mapping == NoteMapping(target=60)
        assert table.get(36).color == ColorPair(rest=0, pressed=37)
        assert table.get(37).mapping == FingeringMapping(key=FingeringKey.G_SHARP)

    def test_missing_colors_are_neutral(self):
        table = serialization.parse(EXAMPLE)
        assert table.get(37).color == ColorPair.neutral()

    def test_all_types(self):
        table = serialization.parse(
            '[{"k": 1, "type": "pitch", "b": -2},'
            ' {"k": 2, "type": "timbre", "w": "sawtooth"},'
            ' {"k": 3, "type": "note", "n": "Bb", "o": 3}]'
        )
        assert table.get(1).mapping == PitchBendMapping(bend=-2)
        assert table.get(2).mapping == TimbreMapping(waveform=Waveform.SAWTOOTH)
        assert table.get(3).mapping == NoteMapping(target=58)

    def test_ascii_fingering_names(self):
        table = serialization.parse('[{"k": 1, "type": "sax", "s": "low bb"}]')
        assert table.get(1).mapping == FingeringMapping(key=FingeringKey.LOW_B_FLAT)

    def test_integral_floats_accepted(self):
        table = serialization.parse('[{"k": 1.0, "type": "pitch", "b": 2.0, "r": 5.0}]')
        assert table.get(1).mapping == PitchBendMapping(bend=2)
        assert table.get(1).color.rest == 5

    def test_later_duplicates_win(self):
        table = serialization.parse(
            '[{"k": 1, "type": "pitch", "b": 1}, {"k": 1, "type": "pitch", "b": 2}]'
        )
        assert len(table) == 1
        assert table.get(1).mapping == PitchBendMapping(bend=2)

    def test_empty_array(self):
        assert serialization.parse("[]") == MappingTable.empty()


@pytest.mark.unit
class TestParseErrors:
    """Test the error kind reported for each kind of broken document."""

    @pytest.mark.parametrize(
        "text, error_type",
        [
            ("not json", MalformedJSONError),
            ('[{"k": 1,}]', MalformedJSONError),
            ('{"k": 1}', NotAnArrayError),
            ("42", NotAnArrayError),
            ("[1]", MissingKeyError),
            ('[{"type": "note", "n": "C", "o": 4}]', MissingKeyError),
            ('[{"k": "1", "type": "pitch", "b": 1}]', MissingKeyError),
            ('[{"k": true, "type": "pitch", "b": 1}]', MissingKeyError),
            ('[{"k": 1.5, "type": "pitch", "b": 1}]', MissingKeyError),
            ('[{"k": 1, "type": "drum"}]', UnknownTypeError),
            ('[{"k": 1}]', UnknownTypeError),
            ('[{"k": 1, "type": "note", "n": "C"}]', InvalidFieldForTypeError),
            ('[{"k": 1, "type": "note", "n": 4, "o": 4}]', InvalidFieldForTypeError),
            ('[{"k": 1, "type": "pitch", "b": "up"}]', InvalidFieldForTypeError),
            ('[{"k": 1, "type": "timbre", "w": "noise"}]', InvalidFieldForTypeError),
            ('[{"k": 1, "type": "sax"}]', InvalidFieldForTypeError),
            ('[{"k": 1, "type": "pitch", "b": 1, "r": 128}]', InvalidFieldForTypeError),
            ('[{"k": 1, "type": "pitch", "b": 1, "p": "red"}]', InvalidFieldForTypeError),
            ('[{"k": 1, "type": "note", "n": "H", "o": 4}]', InvalidNoteNameError),
            ('[{"k": 1, "type": "sax", "s": "Z"}]', InvalidFingeringKeyError),
        ],
    )
    def test_error_kind(self, text, error_type):
        with pytest.raises(error_type):
            serialization.parse(text)

    def test_invalid_note_name(self):
        """A bad pitch class rejects the whole document."""
        with pytest.raises(InvalidNoteNameError) as exc_info:
            serialization.parse('[{"k":1,"type":"note","n":"H","o":4}]')
        assert exc_info.value.kind == ParseErrorKind.INVALID_NOTE_NAME
        assert exc_info.value.index == 0

    def test_field_errors_come_before_name_errors(self):
        with pytest.raises(InvalidFieldForTypeError):
            serialization.parse('[{"k": 1, "type": "note", "n": "H", "o": 4, "r": 300}]')

    def test_index_of_failing_entry(self):
        with pytest.raises(MappingParseError) as exc_info:
            serialization.parse(
                '[{"k": 1, "type": "pitch", "b": 1}, {"k": 2, "type": "sax", "s": "nope"}]'
            )
        assert exc_info.value.kind == ParseErrorKind.INVALID_FINGERING_KEY
        assert exc_info.value.index == 1
        assert "entry 1" in exc_info.value.user_message

    def test_document_errors_have_no_index(self):
        with pytest.raises(MalformedJSONError) as exc_info:
            serialization.parse("[")
        assert exc_info.value.index is None
        assert exc_info.value.recoverable

    def test_deep_nesting_is_malformed(self):
        with pytest.raises(MalformedJSONError) as exc_info:
            serialization.parse("[" * 100_000 + "]" * 100_000)
        assert "nested too deeply" in exc_info.value.user_message


@pytest.mark.unit
class TestFormat:
    """Test formatting tables as documents."""

    def test_empty(self):
        assert serialization.format(MappingTable.empty()) == "[]"

    def test_aligned_columns(self):
        table = (
            MappingTable.empty()
            .set_mapping(37, FingeringMapping(key=FingeringKey.G_SHARP), ColorPair(rest=35, pressed=39))
            .set_mapping(36, NoteMapping(target=60), ColorPair(rest=0, pressed=37))
        )
        assert serialization.format(table) == (
            "[\n"
            '  { "k": 36, "type": "note", "n": "C", "o": 4, "r": 0, "p": 37 },\n'
            '  { "k": 37, "type": "sax",  "s": "G♯", "r": 35, "p": 39 }\n'
            "]"
        )

    def test_note_names_padded(self):
        table = (
            MappingTable.empty()
            .set_mapping(1, NoteMapping(target=60))
            .set_mapping(2, NoteMapping(target=61))
        )
        lines = serialization.format(table).splitlines()
        assert lines[1] == '  { "k": 1, "type": "note", "n": "C",  "o": 4, "r": 0, "p": 0 },'
        assert lines[2] == '  { "k": 2, "type": "note", "n": "C#", "o": 4, "r": 0, "p": 0 }'

    def test_output_is_json_sorted_by_key(self):
        text = serialization.format(regenerate_isomorphic(39, 2, 5))
        document = json.loads(text)
        keys = [item["k"] for item in document]
        assert keys == sorted(keys)
        assert all({"r", "p"} <= item.keys() for item in document)


@pytest.mark.unit
class TestRoundTrip:
    """Test parse(format(table)) == table."""

    def test_isomorphic_table(self):
        table = regenerate_isomorphic(39, 2, 5)
        assert serialization.parse(serialization.format(table)) == table

    def test_fingering_table(self):
        table = generate_fingering_layout()
        assert serialization.parse(serialization.format(table)) == table

    def test_mixed_table(self, mixed_table):
        assert serialization.parse(serialization.format(mixed_table)) == mixed_table

    def test_parsed_table(self):
        table = serialization.parse(
            '[{"k": 5, "type": "note", "n": "Eb", "o": -1, "r": 3},'
            ' {"k": 6, "type": "note", "n": "G", "o": 10}]'
        )
        assert serialization.parse(serialization.format(table)) == table


@pytest.mark.integration
class TestFiles:
    """Test load/dump."""

    def test_dump_and_load(self, temp_dir, mixed_table):
        path = temp_dir / "maps" / "mixed.json"
        serialization.dump(mixed_table, path)
        assert path.read_text(encoding="utf-8").endswith("]\n")
        assert serialization.load(path) == mixed_table

    def test_load_invalid(self, temp_dir):
        path = temp_dir / "broken.json"
        path.write_text('{"k": 1}', encoding="utf-8")
        with pytest.raises(NotAnArrayError):
            serialization.load(path)

    def test_load_non_utf8(self, temp_dir):
        path = temp_dir / "latin1.json"
        path.write_bytes(b'[{"k": 11, "type": "note", "note": "C4", "comment": "caf\xe9"}]')
        with pytest.raises(MalformedJSONError) as exc_info:
            serialization.load(path)
        assert "not UTF-8" in exc_info.value.user_message
        assert exc_info.value.index is None
