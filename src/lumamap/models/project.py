"""Project model: the persisted list of regions (data only, persistence is in ProjectService)."""

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from .region import Region


class Project(BaseModel):
    """A saved mapping project."""

    name: str = Field(default="untitled", description="Project name")
    regions: list[Region] = Field(default_factory=list, description="Regions in draw order")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation timestamp")
    modified_at: datetime = Field(default_factory=datetime.now, description="Last modified timestamp")

    @field_serializer("created_at", "modified_at")
    def serialize_datetime(self, dt: datetime) -> str:
        """Serialize datetime to ISO format."""
        return dt.isoformat()

    @classmethod
    def create_empty(cls, name: str) -> "Project":
        """Create a new project with no regions."""
        return cls(name=name)
