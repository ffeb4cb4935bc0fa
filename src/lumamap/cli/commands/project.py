"""Project inspection commands."""

from pathlib import Path

import click

from lumamap.exceptions import LumaMapError, format_error_for_display
from lumamap.midi import note_name
from lumamap.models import AppConfig, IntensityMode, Region
from lumamap.services import ProjectService


def describe_trigger(region: Region) -> str:
    """Human summary of a region's trigger, e.g. 'omni C4-D4 fixed 100%'."""
    channel = "omni" if region.is_omni else f"ch{region.channel_filter}"
    if region.note_range_low == region.note_range_high:
        notes = note_name(region.note_range_low)
    else:
        notes = f"{note_name(region.note_range_low)}-{note_name(region.note_range_high)}"
    mode = "velocity" if region.intensity_mode == IntensityMode.VELOCITY_SCALED else "fixed"
    return f"{channel} {notes} {mode} {region.base_intensity:.0%}"


def _load(path: Path):
    service = ProjectService(AppConfig())
    try:
        return service.load(path)
    except LumaMapError as e:
        message, hint = format_error_for_display(e)
        click.echo(f"Error: {message}", err=True)
        if hint:
            click.echo(f"\nSuggestion: {hint}", err=True)
        raise SystemExit(1) from e


@click.group(name="project")
def project_group():
    """Inspect mapping projects."""
    pass


@project_group.command(name="show")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def show_project(path: Path):
    """List the regions in a project."""
    project = _load(path)
    click.echo(f"Project: {project.name} ({len(project.regions)} regions)\n")
    for i, region in enumerate(project.regions):
        click.echo(
            f"  [{i}] {region.name or region.id:<20} {describe_trigger(region):<28} "
            f"{region.color.to_hex()}  {len(region.points)} pts"
        )


@project_group.command(name="validate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate_project(path: Path):
    """Report regions that will never render or light up."""
    project = _load(path)
    issues = ProjectService.inspect(project)
    if not issues:
        click.echo(f"OK: {len(project.regions)} region(s), no problems found")
        return

    click.echo(f"{len(issues)} problem(s) in {path}:")
    for issue in issues:
        click.echo(f"  - {issue.region_name or issue.region_id}: {issue.reason}")
    raise SystemExit(1)
