"""Core mapping logic: activity tracking, fingering resolution, layouts, engine."""

from .activity import ActivityTracker
from .engine import MappingEngine
from .fingering import DEFAULT_COMBOS, Combo, FingeringResolver, find_ambiguous_combos
from .layouts import (
    DEFAULT_DELTA_TABLE,
    GRID_8X8,
    GRID_9X9,
    STACKED_OCTAVE_DELTA_TABLE,
    ColorRule,
    GridLayout,
    apply_color_rule,
    default_color_rule,
    generate_fingering_layout,
    layout_for,
    regenerate_from_delta_table,
    regenerate_isomorphic,
)

__all__ = [
    "DEFAULT_COMBOS",
    "DEFAULT_DELTA_TABLE",
    "GRID_8X8",
    "GRID_9X9",
    "STACKED_OCTAVE_DELTA_TABLE",
    "ActivityTracker",
    "ColorRule",
    "Combo",
    "FingeringResolver",
    "GridLayout",
    "MappingEngine",
    "apply_color_rule",
    "default_color_rule",
    "find_ambiguous_combos",
    "generate_fingering_layout",
    "layout_for",
    "regenerate_from_delta_table",
    "regenerate_isomorphic",
]
