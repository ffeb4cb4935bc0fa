"""Headless performance command."""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from lumamap.exceptions import LumaMapError, format_error_for_display
from lumamap.models import AppConfig, AppMode

logger = logging.getLogger(__name__)


@click.command(name="run")
@click.argument("project", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--port", "-p", default=None, help="MIDI input name (substring, default: from config)")
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.lumamap/config.json)",
)
def run(project: Path, port: Optional[str], config_file: Optional[Path]):
    """
    Perform a project headlessly.

    Listens to a MIDI input and prints each change in the set of lit
    regions. Press Ctrl+C to stop.
    """
    from lumamap.app import LumaMapApplication

    try:
        config = AppConfig.load_or_default(config_file)
        if port:
            config.input_port = port

        app = LumaMapApplication(config)
        if port:
            app.require_input(port)
        loaded = app.open_project(project)
    except LumaMapError as e:
        message, hint = format_error_for_display(e)
        click.echo(f"Error: {message}", err=True)
        if hint:
            click.echo(f"\nSuggestion: {hint}", err=True)
        raise SystemExit(1) from e

    app.interaction.set_mode(AppMode.PERFORMANCE)
    click.echo(f"Performing '{loaded.name}' ({len(loaded.regions)} regions)")
    click.echo("Press Ctrl+C to stop\n")

    interval = 1.0 / config.render_fps
    last_lit: list[str] = []
    try:
        app.start()
        while True:
            lit = [region.name or region.id for region in app.active_regions()]
            if lit != last_lit:
                timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
                click.echo(f"[{timestamp}] lit: {', '.join(lit) if lit else '-'}")
                last_lit = lit
            time.sleep(interval)
    except KeyboardInterrupt:
        click.echo("\nStopping...")
        logger.info("Run interrupted by user")
    finally:
        app.stop()
