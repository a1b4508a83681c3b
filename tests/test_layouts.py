"""Tests for grid layouts and table generators."""

import pytest

from launchmapper.core import (
    DEFAULT_DELTA_TABLE,
    GRID_8X8,
    GRID_9X9,
    STACKED_OCTAVE_DELTA_TABLE,
    GridLayout,
    apply_color_rule,
    generate_fingering_layout,
    layout_for,
    regenerate_from_delta_table,
    regenerate_isomorphic,
)
from launchmapper.models import (
    ColorPair,
    ColorScheme,
    FingeringKey,
    FingeringMapping,
    GridSize,
    NoteMapping,
)


def targets(table):
    return {key: entry.mapping.target for key, entry in table.items()}


@pytest.mark.unit
class TestGridLayout:
    """Test Programmer-mode grid layouts."""

    def test_9x9_rows(self):
        assert GRID_9X9.rows[0] == tuple(range(11, 20))
        assert GRID_9X9.rows[8] == tuple(range(91, 100))
        assert len(GRID_9X9.keys()) == 81

    def test_8x8_rows(self):
        assert GRID_8X8.rows[0] == tuple(range(11, 19))
        assert GRID_8X8.rows[7][7] == 88
        assert len(GRID_8X8.keys()) == 64

    def test_key_at(self):
        assert GRID_9X9.key_at(0, 0) == 11
        assert GRID_9X9.key_at(4, 7) == 85
        assert GRID_8X8.key_at(7, 8) is None
        assert GRID_8X8.key_at(-1, 0) is None

    def test_layout_for(self):
        assert layout_for(GridSize.GRID_8X8) is GRID_8X8
        assert layout_for(GridSize.GRID_9X9) is GRID_9X9

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ValueError):
            GridLayout(rows=((11, 12), (12, 13)))


@pytest.mark.unit
class TestIsomorphic:
    """Test the isomorphic generator."""

    def test_single_row_wicky_hayden(self):
        layout = GridLayout(rows=((11, 12, 13),))
        table = regenerate_isomorphic(39, 2, 5, layout=layout)
        assert targets(table) == {11: 39, 12: 41, 13: 43}

    def test_default_color_rule(self):
        layout = GridLayout(rows=((11, 12, 13),))
        table = regenerate_isomorphic(39, 2, 5, layout=layout)
        assert table.get(11).color == ColorPair(rest=0x03, pressed=0x24)  # D#2
        assert table.get(12).color == ColorPair(rest=0x00, pressed=0x25)  # F2

    def test_rows_add_vertical_step(self):
        table = regenerate_isomorphic(39, 2, 5)
        assert len(table) == 81
        assert table.get(21).mapping.target == 44
        assert table.get(99).mapping.target == 39 + 8 * 2 + 8 * 5

    def test_deterministic(self):
        assert regenerate_isomorphic(48, 1, 4) == regenerate_isomorphic(48, 1, 4)

    def test_custom_color_rule(self):
        green = ColorPair(rest=0x15, pressed=0x16)
        table = regenerate_isomorphic(60, 1, 5, lambda mapping: green, GRID_8X8)
        assert all(entry.color == green for _, entry in table.items())


@pytest.mark.unit
class TestDeltaTables:
    """Test the delta table generator."""

    def test_default_delta_rows(self):
        assert DEFAULT_DELTA_TABLE[0] == (0, 2, 4, 5, 7, 9, 11, 12, 14)
        assert DEFAULT_DELTA_TABLE[8] == (8, 10, 12, 13, 15, 17, 19, 20, 22)

    def test_stacked_octave_rows(self):
        assert STACKED_OCTAVE_DELTA_TABLE[1][0] == 1
        assert STACKED_OCTAVE_DELTA_TABLE[2][0] == 12
        assert STACKED_OCTAVE_DELTA_TABLE[3][0] == 13
        assert STACKED_OCTAVE_DELTA_TABLE[8] == (48, 50, 52, 53, 55, 57, 59, 60, 62)

    def test_regenerate(self):
        table = regenerate_from_delta_table(DEFAULT_DELTA_TABLE, 48)
        assert table.get(11).mapping.target == 48
        assert table.get(12).mapping.target == 50
        assert table.get(21).mapping.target == 49

    def test_arbitrary_table(self):
        layout = GridLayout(rows=((11, 12), (21, 22)))
        table = regenerate_from_delta_table([[0, 7], [3, -12]], 60, layout=layout)
        assert targets(table) == {11: 60, 12: 67, 21: 63, 22: 48}

    def test_table_too_small(self):
        with pytest.raises(ValueError):
            regenerate_from_delta_table([[0, 1]], 60, layout=GRID_8X8)


@pytest.mark.unit
class TestFingeringLayout:
    """Test the saxophone layout generator."""

    def test_9x9_has_every_placement(self):
        table = generate_fingering_layout()
        assert len(table) == 24
        assert table.get(85).mapping == FingeringMapping(key=FingeringKey.B)
        assert table.get(98).mapping == FingeringMapping(key=FingeringKey.OCTAVE_1)
        assert table.get(61).mapping == FingeringMapping(key=FingeringKey.PLAY)

    def test_8x8_skips_top_row(self):
        table = generate_fingering_layout(layout=GRID_8X8)
        assert len(table) == 21
        octave_keys = table.keys_where(
            lambda m: isinstance(m, FingeringMapping) and m.key.is_octave
        )
        assert octave_keys == []

    def test_colors(self):
        table = generate_fingering_layout()
        assert table.get(85).color == ColorPair(rest=0x23, pressed=0x27)
        assert table.get(98).color == ColorPair(rest=0x74, pressed=0x77)


@pytest.mark.unit
class TestApplyColorRule:
    """Test recoloring a table."""

    def test_recolor(self):
        layout = GridLayout(rows=((11, 12),))
        table = regenerate_isomorphic(60, 1, 5, layout=layout)
        recolored = apply_color_rule(table, ColorScheme(single_color=True).color_for)
        assert recolored.get(12).color == ColorPair(rest=0x00, pressed=0x25)
        assert recolored.get(12).mapping == NoteMapping(target=61)

    def test_unchanged_entries_are_kept(self):
        table = regenerate_isomorphic(60, 1, 5, layout=GRID_8X8)
        recolored = apply_color_rule(table)
        assert recolored == table
        assert recolored.get(11) is table.get(11)
