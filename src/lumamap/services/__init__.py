"""Region registry and project persistence services."""

from lumamap.services.region_registry import RegionRegistry
from lumamap.services.project_service import ProjectService, RegionIssue

__all__ = [
    "ProjectService",
    "RegionIssue",
    "RegionRegistry",
]
