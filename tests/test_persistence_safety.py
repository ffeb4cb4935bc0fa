"""Tests for persistence safety features (backups, atomic writes, corruption handling)."""

import json
from pathlib import Path

import pytest

from lumamap.exceptions import ConfigFileInvalidError, ConfigValidationError
from lumamap.model_manager.persistence import PydanticPersistence
from lumamap.models import AppConfig, Project, Region


@pytest.mark.unit
class TestPersistenceSafety:
    """Test safety features of PydanticPersistence."""

    def test_save_creates_backup(self, tmp_path: Path):
        """Test that save_json creates a .bak file before overwriting."""
        path = tmp_path / "stage.json"

        PydanticPersistence.save_json(Project(name="original"), path, backup=False)
        PydanticPersistence.save_json(Project(name="modified"), path, backup=True)

        backup_path = path.with_suffix(".json.bak")
        assert backup_path.exists()
        assert PydanticPersistence.load_json(backup_path, Project).name == "original"
        assert PydanticPersistence.load_json(path, Project).name == "modified"

    def test_save_without_backup(self, tmp_path: Path):
        path = tmp_path / "stage.json"

        PydanticPersistence.save_json(Project(name="a"), path, backup=False)
        PydanticPersistence.save_json(Project(name="b"), path, backup=False)

        assert not path.with_suffix(".json.bak").exists()

    def test_no_temp_file_left_behind(self, tmp_path: Path):
        path = tmp_path / "stage.json"
        PydanticPersistence.save_json(Project(name="a"), path)
        assert not path.with_suffix(".json.tmp").exists()

    def test_creates_parent_directories(self, tmp_path: Path):
        path = tmp_path / "nested" / "dir" / "stage.json"
        PydanticPersistence.save_json(Project(name="a"), path)
        assert path.exists()

    def test_load_missing_raises_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            PydanticPersistence.load_json(tmp_path / "missing.json", Project)

    def test_load_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.json"
        path.write_text("   \n")

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            PydanticPersistence.load_json(path, Project)
        assert "empty" in exc_info.value.technical_message

    def test_load_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text('{"name": "stage",}')

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            PydanticPersistence.load_json(path, Project)
        assert exc_info.value.recoverable
        assert exc_info.value.file_path == str(path)

    def test_load_invalid_value(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        region = Region().model_dump(mode="json")
        region["channel_filter"] = 42
        path.write_text(json.dumps({"name": "x", "regions": [region]}))

        with pytest.raises(ConfigValidationError) as exc_info:
            PydanticPersistence.load_json(path, Project)
        assert exc_info.value.field == "regions.0.channel_filter"
        assert "0 (omni) or 1-16" in exc_info.value.recovery_hint

    def test_load_or_default_returns_default(self, tmp_path: Path):
        config = PydanticPersistence.load_json_or_default(tmp_path / "missing.json", AppConfig)
        assert config.input_port is None

    def test_load_or_default_uses_factory(self, tmp_path: Path):
        project = PydanticPersistence.load_json_or_default(
            tmp_path / "missing.json", Project, default_factory=lambda: Project(name="fresh")
        )
        assert project.name == "fresh"

    def test_load_or_default_propagates_corruption(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigFileInvalidError):
            PydanticPersistence.load_json_or_default(path, AppConfig)
