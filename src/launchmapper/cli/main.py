"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from launchmapper import __version__

from .commands import config, finger, generate, midi_group, note, recolor, validate

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".launchmapper" / "logs"

# Handler installed by setup_logging, replaced on the next call
_file_handler: Optional[logging.Handler] = None


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file
    """
    global _file_handler

    # Determine log level based on flags
    if debug:
        level = logging.DEBUG
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Override with explicit log level if provided
    if log_file:
        level = getattr(logging, log_level.upper())

    # Determine log file path
    if debug and not log_file:
        log_path = Path.cwd() / "launchmapper-debug.log"
    elif log_file:
        log_path = log_file
    else:
        DEFAULT_LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_path = DEFAULT_LOG_DIR / "launchmapper.log"

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    if _file_handler is not None:
        root_logger.removeHandler(_file_handler)
        _file_handler.close()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    _file_handler = file_handler

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="launchmapper")
@click.option(
    '--config-file',
    '-c',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.launchmapper/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./launchmapper-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    config_file: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Launchpad Mapper - pad layouts, note mappings and saxophone fingerings
    for grid controllers.

    \b
    Examples:
      # Wicky-Hayden layout for a 9x9 grid
      launchmapper generate isomorphic -o wicky.json

      # Check a hand-edited mapping file
      launchmapper validate wicky.json

      # Which note does a fingering play?
      launchmapper finger B A G "Oct 1"

      # Play a mapping with a Launchpad and an external synth
      launchmapper midi run wicky.json -i "Launchpad" -s "Synth"
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_file
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


# Register commands
cli.add_command(generate)
cli.add_command(validate)
cli.add_command(recolor)
cli.add_command(note)
cli.add_command(finger)
cli.add_command(config)
cli.add_command(midi_group)

if __name__ == "__main__":
    cli()
