"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from lumamap import __version__

from .commands import config_group, midi_group, project_group, run

logger = logging.getLogger(__name__)

LOG_DIR = Path.home() / ".lumamap" / "logs"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

_VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _log_level(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> int:
    # An explicit --log-file uses --log-level and ignores -v/--debug
    if log_file:
        return getattr(logging, log_level.upper())
    if debug:
        return logging.DEBUG
    return _VERBOSITY_LEVELS.get(verbose, logging.DEBUG)


def _log_path(debug: bool, log_file: Optional[Path]) -> Path:
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "lumamap-debug.log"
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    return LOG_DIR / "lumamap.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Send log records to a rotating file.

    Levels: WARNING by default, INFO with -v, DEBUG with -vv or --debug.
    `--debug` writes to ./lumamap-debug.log instead of ~/.lumamap/logs/.
    With `--log-file`, `--log-level` decides the level.

    Returns:
        Path of the log file
    """
    level = _log_level(verbose, debug, log_file, log_level)
    path = _log_path(debug, log_file)

    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    logger.info(f"Logging to {path} at {logging.getLevelName(level)}")
    return path


@click.group()
@click.version_option(version=__version__, prog_name="lumamap")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./lumamap-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for --log-file (default: INFO)'
)
def cli(verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    LumaMap - light up projected polygons from MIDI notes.

    \b
    Examples:
      # Perform a saved project with the first MIDI input
      lumamap run ~/.lumamap/projects/stage.json

      # Use a specific MIDI input
      lumamap run stage.json --port "Launchkey"

      # Check a project for regions that can never light up
      lumamap project validate stage.json

      # See what a controller is sending
      lumamap midi monitor
    """
    setup_logging(verbose, debug, log_file, log_level)


cli.add_command(run)
cli.add_command(midi_group)
cli.add_command(project_group)
cli.add_command(config_group)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
