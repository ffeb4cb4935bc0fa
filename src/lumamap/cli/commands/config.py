"""Configuration commands."""

from pathlib import Path
from typing import Optional

import click

from lumamap.exceptions import LumaMapError, format_error_for_display
from lumamap.models import AppConfig


@click.group(name="config")
def config_group():
    """View LumaMap configuration."""
    pass


@config_group.command(name="show")
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.lumamap/config.json)",
)
def show_config(config_file: Optional[Path]):
    """Print the effective configuration as JSON."""
    try:
        config = AppConfig.load_or_default(config_file)
    except LumaMapError as e:
        message, hint = format_error_for_display(e)
        click.echo(f"Error: {message}", err=True)
        if hint:
            click.echo(f"\nSuggestion: {hint}", err=True)
        raise SystemExit(1) from e

    click.echo(config.model_dump_json(indent=2))
