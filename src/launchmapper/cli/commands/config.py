"""Config command implementations."""

import logging
import sys

import click

from launchmapper.exceptions import ConfigurationError
from launchmapper.model_manager import PydanticPersistence
from launchmapper.models import AppConfig

from .common import config_path, fail, load_config

logger = logging.getLogger(__name__)


@click.group(name="config")
def config():
    """Show or reset the configuration."""
    pass


@config.command(name="show")
@click.pass_context
def show(ctx):
    """Print the configuration (defaults if no file exists)."""
    click.echo(load_config(ctx).model_dump_json(indent=2))


@config.command(name="path")
@click.pass_context
def path(ctx):
    """Print the path of the config file."""
    click.echo(str(config_path(ctx)))


@config.command(name="reset")
@click.confirmation_option(prompt="Reset the configuration to defaults?")
@click.pass_context
def reset(ctx):
    """Write the default configuration (the old file is kept as .bak)."""
    target = config_path(ctx)
    try:
        AppConfig().save(target)
    except (ConfigurationError, OSError) as e:
        fail(e)
    logger.info(f"Config reset to defaults at {target}")
    click.echo(f"Configuration reset: {target}")


@config.command(name="validate")
@click.pass_context
def validate_config(ctx):
    """Check the config file without changing it."""
    target = config_path(ctx)
    is_valid, error = PydanticPersistence.validate_json(target, AppConfig)
    if is_valid:
        click.echo(f"[OK]   {target}")
        return
    click.echo(f"[FAIL] {target}: {error}")
    sys.exit(1)
