"""Service for saving and opening mapping projects."""

import logging
from datetime import datetime
from pathlib import Path
from typing import NamedTuple

from pydantic import TypeAdapter, ValidationError

from lumamap.core.geometry import polygon_area
from lumamap.exceptions import ProjectFileError, wrap_pydantic_error
from lumamap.model_manager import PydanticPersistence
from lumamap.models import MIN_REGION_POINTS, AppConfig, Project, Region

logger = logging.getLogger(__name__)

_REGION_LIST = TypeAdapter(list[Region])


class RegionIssue(NamedTuple):
    """Something that keeps a loaded region from rendering or matching."""

    region_id: str
    region_name: str
    reason: str


class ProjectService:
    """
    Handles project persistence.

    Projects are stored as JSON in `config.projects_dir`. Loading checks
    field types and ranges only; regions that can never light up (too few
    points, inverted note range) load as-is and are reported by `inspect`.

    The service is stateless apart from the config it was given.
    """

    def __init__(self, config: AppConfig):
        self.config = config

    def path_for(self, name: str) -> Path:
        """Location of a named project in the projects directory."""
        return self.config.projects_dir / f"{name}.json"

    def list_projects(self) -> list[str]:
        """Names of the projects in the projects directory."""
        if not self.config.projects_dir.exists():
            return []
        return sorted(p.stem for p in self.config.projects_dir.glob("*.json"))

    def load(self, path: Path) -> Project:
        """
        Open a project file.

        A bare JSON array of regions is accepted too and wrapped in a
        project named after the file.

        Raises:
            ProjectFileError: If the file doesn't exist
            ConfigFileInvalidError: If the JSON syntax is invalid
            ConfigValidationError: If a region field is out of range
        """
        if not path.exists():
            raise ProjectFileError(str(path), "file not found")

        content = PydanticPersistence.read_text(path)
        if content.lstrip().startswith("["):
            try:
                regions = _REGION_LIST.validate_json(content)
            except ValidationError as e:
                raise wrap_pydantic_error(e, str(path)) from e
            project = Project(name=path.stem, regions=regions)
        else:
            project = PydanticPersistence.load_json(path, Project)

        logger.info(f"Opened project '{project.name}' ({len(project.regions)} regions) from {path}")
        return project

    def open_by_name(self, name: str) -> Project:
        """Open a project from the projects directory."""
        return self.load(self.path_for(name))

    def save(self, project: Project, path: Path | None = None) -> Path:
        """
        Save a project, updating its modified timestamp.

        Args:
            project: Project to save
            path: Destination; defaults to `<projects_dir>/<name>.json`

        Returns:
            The path written
        """
        if path is None:
            path = self.path_for(project.name)

        project.modified_at = datetime.now()
        PydanticPersistence.save_json(project, path)
        logger.info(f"Saved project '{project.name}' to {path}")
        return path

    @staticmethod
    def inspect(project: Project) -> list[RegionIssue]:
        """List the regions that will never render or never match."""
        issues = []
        for region in project.regions:
            if len(region.points) < MIN_REGION_POINTS:
                reason = f"only {len(region.points)} point(s)"
            elif polygon_area(region.points) == 0.0:
                reason = "polygon has no area"
            elif region.note_range_low > region.note_range_high:
                reason = (
                    f"note range {region.note_range_low}-{region.note_range_high} is inverted"
                )
            else:
                continue
            issues.append(RegionIssue(region.id, region.name, reason))
        return issues
