"""Layout generator commands."""

import logging
from pathlib import Path
from typing import Optional

import click

from launchmapper.core.layouts import (
    DEFAULT_DELTA_TABLE,
    STACKED_OCTAVE_DELTA_TABLE,
    generate_fingering_layout,
    layout_for,
    regenerate_from_delta_table,
    regenerate_isomorphic,
)
from launchmapper.exceptions import InvalidNoteFormatError
from launchmapper.models import GridSize, parse_note_text

from .common import fail, load_config, write_table

logger = logging.getLogger(__name__)

DELTA_TABLES = {
    "default": DEFAULT_DELTA_TABLE,
    "stacked": STACKED_OCTAVE_DELTA_TABLE,
}


def _note_value(value: Optional[str]) -> Optional[int]:
    """Accept a note number or note text such as ``D#2``."""
    if value is None:
        return None
    if value.lstrip("-").isdigit():
        return int(value)
    try:
        return parse_note_text(value)
    except InvalidNoteFormatError as e:
        raise click.BadParameter(e.user_message) from e


output_option = click.option(
    '--output',
    '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Write the mapping document to a file instead of printing it'
)

grid_option = click.option(
    '--grid',
    '-g',
    type=click.Choice([size.value for size in GridSize]),
    default=None,
    help='Grid size (default: from config)'
)


@click.group(name="generate")
def generate():
    """Generate mapping documents."""
    pass


@generate.command(name="isomorphic")
@click.option('--start', '-s', type=str, default=None, help='Note of the bottom-left pad (number or name)')
@click.option('--horizontal', '-h', type=int, default=None, help='Semitones per column')
@click.option('--vertical', '-v', type=int, default=None, help='Semitones per row')
@grid_option
@output_option
@click.pass_context
def isomorphic(
    ctx,
    start: Optional[str],
    horizontal: Optional[int],
    vertical: Optional[int],
    grid: Optional[str],
    output: Optional[Path],
):
    """
    Isomorphic note layout: every column adds the same interval, every row
    another one. Defaults come from the config (Wicky-Hayden: 2 and 5).
    """
    config = load_config(ctx)
    settings = config.isomorphic
    start_note = _note_value(start)

    table = regenerate_isomorphic(
        settings.start_note if start_note is None else start_note,
        settings.horizontal_step if horizontal is None else horizontal,
        settings.vertical_step if vertical is None else vertical,
        config.colors.color_for,
        layout_for(GridSize(grid) if grid else config.grid),
    )
    try:
        write_table(table, output)
    except OSError as e:
        fail(e)


@generate.command(name="delta")
@click.option(
    '--table',
    '-t',
    'table_name',
    type=click.Choice(list(DELTA_TABLES)),
    default="default",
    help='Delta table (default: major scale rows a semitone apart)'
)
@click.option('--start', '-s', type=str, default="C3", help='Note of the bottom-left pad (default: C3)')
@grid_option
@output_option
@click.pass_context
def delta(ctx, table_name: str, start: str, grid: Optional[str], output: Optional[Path]):
    """Note layout from a table of offsets above the start note."""
    config = load_config(ctx)
    table = regenerate_from_delta_table(
        DELTA_TABLES[table_name],
        _note_value(start),
        config.colors.color_for,
        layout_for(GridSize(grid) if grid else config.grid),
    )
    try:
        write_table(table, output)
    except OSError as e:
        fail(e)


@generate.command(name="fingering")
@grid_option
@output_option
@click.pass_context
def fingering(ctx, grid: Optional[str], output: Optional[Path]):
    """Saxophone fingering layout."""
    config = load_config(ctx)
    table = generate_fingering_layout(
        config.colors.color_for,
        layout_for(GridSize(grid) if grid else config.grid),
    )
    try:
        write_table(table, output)
    except OSError as e:
        fail(e)
