"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from lumamap.model_manager.persistence import PydanticPersistence

from .region import RegionDefaults

DEFAULT_HOME = Path.home() / ".lumamap"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Paths
    projects_dir: Path = Field(
        default_factory=lambda: DEFAULT_HOME / "projects",
        description="Directory for saved projects",
    )

    # MIDI settings
    input_port: str | None = Field(
        default=None,
        description="Preferred MIDI input (substring of the port name, None = first available)",
    )
    midi_poll_interval: float = Field(
        default=2.0, gt=0.0, description="How often to check for MIDI device changes (seconds)"
    )

    # Headless rendering
    render_fps: float = Field(
        default=30.0, gt=0.0, le=240.0, description="Activation evaluation rate for headless runs"
    )

    # Authoring
    region_defaults: RegionDefaults = Field(
        default_factory=RegionDefaults,
        description="Configuration applied to newly drawn regions",
    )

    # Session settings
    last_project: str | None = Field(default=None, description="Last opened project name")

    @field_serializer("projects_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    def ensure_directories(self) -> None:
        """Create config directories if they don't exist."""
        self.projects_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.lumamap/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_HOME / "config.json"

        config = PydanticPersistence.load_json_or_default(path, cls)
        config.ensure_directories()
        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_HOME / "config.json"
        PydanticPersistence.save_json(self, path)
