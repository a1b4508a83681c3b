"""Mapping document commands."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from launchmapper import serialization
from launchmapper.core.layouts import apply_color_rule
from launchmapper.exceptions import MappingParseError, collect_errors
from launchmapper.models import MappingTable

from .common import fail, load_config, write_table

logger = logging.getLogger(__name__)


def _show_table(table: MappingTable) -> None:
    """One line per pad: key, type, target and colors as hex palette codes."""
    for key, entry in table.items():
        rest, pressed = entry.color.to_hex_codes()
        click.echo(
            f"       {key:>3}  {entry.mapping.type:<6}  {entry.mapping.describe():<8}  "
            f"rest {rest}  pressed {pressed}"
        )


@click.command(name="validate")
@click.argument(
    'files',
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option('--show', '-s', is_flag=True, help='List the pads of every valid file')
def validate(files: tuple[Path, ...], show: bool):
    """
    Check mapping documents.

    Every file is checked; the exit code is 1 if any of them is invalid.
    """
    collector = collect_errors("validate mapping documents")

    for path in files:
        with collector.try_operation(str(path)):
            table = serialization.load(path)
            click.echo(f"[OK]   {path}: {len(table)} mapping(s)")
            if show:
                _show_table(table)

    for sub_operation, error in collector.errors:
        kind = error.kind.value if isinstance(error, MappingParseError) else type(error).__name__
        click.echo(f"[FAIL] {sub_operation}: {kind}: {error.user_message}")

    if collector.has_errors:
        click.echo(f"\n{collector.error_count} of {len(files)} file(s) invalid", err=True)
        sys.exit(1)


@click.command(name="recolor")
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--output',
    '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Write the result to a file instead of printing it'
)
@click.option('--in-place', '-i', is_flag=True, help='Overwrite FILE with the result')
@click.pass_context
def recolor(ctx, file: Path, output: Optional[Path], in_place: bool):
    """Reapply the configured color scheme to every pad of FILE."""
    if in_place and output is not None:
        raise click.UsageError("--output and --in-place are mutually exclusive")

    config = load_config(ctx)
    try:
        table = serialization.load(file)
        write_table(apply_color_rule(table, config.colors.color_for), file if in_place else output)
    except (MappingParseError, OSError) as e:
        fail(e)
