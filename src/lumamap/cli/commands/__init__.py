"""CLI commands for lumamap."""

from .config import config_group
from .midi import midi_group
from .project import project_group
from .run import run

__all__ = ["config_group", "midi_group", "project_group", "run"]
