"""Helpers shared by the CLI commands."""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from launchmapper import serialization
from launchmapper.exceptions import ConfigurationError, format_error_for_display
from launchmapper.models import AppConfig, MappingTable
from launchmapper.models.config import DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)


def config_path(ctx: click.Context) -> Path:
    """Config file selected with --config-file, or the default."""
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or DEFAULT_CONFIG_PATH


def load_config(ctx: click.Context) -> AppConfig:
    """Load the config, or exit with a readable error."""
    try:
        return AppConfig.load_or_default(config_path(ctx))
    except ConfigurationError as e:
        fail(e)


def fail(error: Exception) -> NoReturn:
    """Show an error without a traceback and exit with code 1."""
    logger.error(f"Command failed: {error}")
    user_message, recovery_hint = format_error_for_display(error)
    click.echo(f"ERROR: {user_message}", err=True)
    if recovery_hint:
        click.echo(recovery_hint, err=True)
    sys.exit(1)


def write_table(table: MappingTable, output: Optional[Path]) -> None:
    """Write a table to ``output``, or print it when no file is given."""
    if output is None:
        click.echo(serialization.format(table))
        return
    serialization.dump(table, output)
    click.echo(f"Wrote {len(table)} mapping(s) to {output}")
