"""Grid layouts and bulk table generators.

Pads are addressed in Programmer mode: the bottom-left pad is note 11 and
rows are 10 notes apart, so the pad at column ``x``, row ``y`` is
``11 + y * 10 + x``. Row 0 is the bottom row.
"""

import logging
from collections.abc import Callable, Iterator, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from launchmapper.models.color import ColorPair
from launchmapper.models.config import ColorScheme
from launchmapper.models.enums import FingeringKey, GridSize
from launchmapper.models.mapping import FingeringMapping, Mapping, MappingEntry, NoteMapping
from launchmapper.models.table import MappingTable

logger = logging.getLogger(__name__)

ColorRule = Callable[[Mapping], ColorPair]

PROGRAMMER_MODE_OFFSET = 11
PROGRAMMER_MODE_ROW_SPACING = 10


class GridLayout(BaseModel):
    """
    Physical pad keys arranged in rows, bottom row first.

    Rows may have different lengths; generators only visit the coordinates
    that exist.
    """

    model_config = ConfigDict(frozen=True)

    rows: tuple[tuple[int, ...], ...] = Field(description="Pad keys per row, row 0 at the bottom")

    @field_validator("rows")
    @classmethod
    def validate_unique_keys(cls, v: tuple[tuple[int, ...], ...]) -> tuple[tuple[int, ...], ...]:
        """A key can only sit at one coordinate."""
        keys = [key for row in v for key in row]
        if len(keys) != len(set(keys)):
            raise ValueError("Layout contains duplicate keys")
        return v

    @classmethod
    def programmer(cls, size: int) -> "GridLayout":
        """Square Programmer-mode grid of ``size`` x ``size`` pads."""
        return cls(
            rows=tuple(
                tuple(
                    PROGRAMMER_MODE_OFFSET + row * PROGRAMMER_MODE_ROW_SPACING + col
                    for col in range(size)
                )
                for row in range(size)
            )
        )

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def key_at(self, col: int, row: int) -> int | None:
        """Key at a coordinate, or None if the layout has no pad there."""
        if not 0 <= row < len(self.rows):
            return None
        if not 0 <= col < len(self.rows[row]):
            return None
        return self.rows[row][col]

    def coordinates(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(col, row, key)`` for every pad, bottom row first."""
        for row, keys in enumerate(self.rows):
            for col, key in enumerate(keys):
                yield col, row, key

    def keys(self) -> list[int]:
        return [key for _, _, key in self.coordinates()]


GRID_8X8 = GridLayout.programmer(8)
GRID_9X9 = GridLayout.programmer(9)


def layout_for(grid: GridSize) -> GridLayout:
    """Get the layout of a controller surface."""
    if grid == GridSize.GRID_8X8:
        return GRID_8X8
    return GRID_9X9


def default_color_rule(mapping: Mapping) -> ColorPair:
    """Color rule of the default color scheme."""
    return ColorScheme().color_for(mapping)


# Major-scale columns, each row a semitone above the one below
DEFAULT_DELTA_TABLE: tuple[tuple[int, ...], ...] = tuple(
    tuple(step + row for step in (0, 2, 4, 5, 7, 9, 11, 12, 14)) for row in range(9)
)

# Pairs of rows a semitone apart, each pair an octave above the one below
STACKED_OCTAVE_DELTA_TABLE: tuple[tuple[int, ...], ...] = tuple(
    tuple(step + (row // 2) * 12 + row % 2 for step in (0, 2, 4, 5, 7, 9, 11, 12, 14))
    for row in range(9)
)


def _note_table(
    targets: Iterator[tuple[int, int]], color_rule: ColorRule
) -> MappingTable:
    entries = {}
    for key, target in targets:
        mapping = NoteMapping(target=target)
        entries[key] = MappingEntry(mapping=mapping, color=color_rule(mapping))
    return MappingTable.from_entries(entries)


def regenerate_isomorphic(
    start_note: int,
    horizontal_step: int,
    vertical_step: int,
    color_rule: ColorRule = default_color_rule,
    layout: GridLayout = GRID_9X9,
) -> MappingTable:
    """
    Map every pad to a note on an isomorphic grid.

    The pad at ``(col, row)`` plays ``start_note + col * horizontal_step +
    row * vertical_step``. With steps 2 and 5 this is the Wicky-Hayden
    layout.

    Args:
        start_note: Note of the pad at (0, 0)
        horizontal_step: Semitones between neighbouring columns
        vertical_step: Semitones between neighbouring rows
        color_rule: Colors for each generated mapping
        layout: Pads to map

    Returns:
        A table with a note mapping for every pad of the layout
    """
    logger.debug(
        f"Generating isomorphic layout: start={start_note} h={horizontal_step} v={vertical_step}"
    )
    return _note_table(
        (
            (key, start_note + col * horizontal_step + row * vertical_step)
            for col, row, key in layout.coordinates()
        ),
        color_rule,
    )


def regenerate_from_delta_table(
    delta_table: Sequence[Sequence[int]],
    start_note: int,
    color_rule: ColorRule = default_color_rule,
    layout: GridLayout = GRID_9X9,
) -> MappingTable:
    """
    Map every pad to ``start_note + delta_table[row][col]``.

    Raises:
        ValueError: If the delta table does not cover every pad of the layout
    """
    for col, row, _ in layout.coordinates():
        if row >= len(delta_table) or col >= len(delta_table[row]):
            raise ValueError(
                f"Delta table has no entry for column {col}, row {row} "
                f"(layout is {layout.width}x{layout.height})"
            )

    logger.debug(f"Generating delta layout from start={start_note}")
    return _note_table(
        ((key, start_note + delta_table[row][col]) for col, row, key in layout.coordinates()),
        color_rule,
    )


# (col, row, key) placements of the saxophone layout on a 9x9 grid
FINGERING_PLACEMENTS: tuple[tuple[int, int, FingeringKey], ...] = (
    # Right hand
    (4, 0, FingeringKey.D_SHARP),
    (3, 0, FingeringKey.C),
    (4, 1, FingeringKey.D),
    (3, 1, FingeringKey.F_SHARP),
    (4, 2, FingeringKey.E),
    (4, 3, FingeringKey.F),
    # Side keys
    (0, 2, FingeringKey.ALT_B_FLAT),
    (0, 3, FingeringKey.ALT_B_FLAT),
    (0, 4, FingeringKey.ALT_B_FLAT),
    (1, 4, FingeringKey.ALT_C),
    # Gate
    (0, 5, FingeringKey.PLAY),
    (0, 6, FingeringKey.PLAY),
    # Left hand
    (5, 3, FingeringKey.LOW_B_FLAT),
    (6, 4, FingeringKey.LOW_C_SHARP),
    (5, 4, FingeringKey.G_SHARP),
    (4, 4, FingeringKey.LOW_B),
    (4, 5, FingeringKey.G),
    (4, 6, FingeringKey.A),
    (5, 7, FingeringKey.B_FLAT_BIS),
    (4, 7, FingeringKey.B),
    (3, 7, FingeringKey.B_FLAT_BIS),
    # Octave keys
    (7, 8, FingeringKey.OCTAVE_1),
    (6, 8, FingeringKey.OCTAVE_2),
    (5, 8, FingeringKey.OCTAVE_3),
)


def generate_fingering_layout(
    color_rule: ColorRule = default_color_rule,
    layout: GridLayout = GRID_9X9,
) -> MappingTable:
    """
    Place the saxophone fingering keys on the grid.

    Placements that fall outside ``layout`` are skipped, so smaller grids
    get a partial layout.
    """
    entries = {}
    skipped = 0
    for col, row, fingering_key in FINGERING_PLACEMENTS:
        key = layout.key_at(col, row)
        if key is None:
            skipped += 1
            continue
        mapping = FingeringMapping(key=fingering_key)
        entries[key] = MappingEntry(mapping=mapping, color=color_rule(mapping))

    if skipped:
        logger.info(f"Fingering layout: {skipped} placement(s) do not fit the grid")
    return MappingTable.from_entries(entries)


def apply_color_rule(table: MappingTable, color_rule: ColorRule = default_color_rule) -> MappingTable:
    """Recompute the colors of every entry, keeping the mappings."""
    entries = {}
    for key, entry in table.items():
        color = color_rule(entry.mapping)
        entries[key] = entry if color == entry.color else entry.with_color(color)
    return MappingTable.from_entries(entries)
