"""JSON storage for pydantic models (config and projects).

Writes go to `<name>.tmp` first and are renamed over the target, so a crash
mid-save never leaves a half-written project. The previous file is kept as
`<name>.bak`.
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from lumamap.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _sibling(path: Path, extension: str) -> Path:
    return path.with_suffix(path.suffix + extension)


class PydanticPersistence:
    """
    Load and save pydantic models as JSON files.

    All methods are static; the class only groups them.

    Example Usage:
        ```python
        project = PydanticPersistence.load_json(path, Project)
        PydanticPersistence.save_json(project, path)
        ```
    """

    @staticmethod
    def read_text(path: Path) -> str:
        """
        Read a JSON document, rejecting empty files.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the file is empty or unreadable
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFileInvalidError(str(path), f"Cannot read file: {e}") from e
        if not content.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")
        return content

    @staticmethod
    def load_json(path: Path, model_type: type[M]) -> M:
        """
        Parse and validate a model from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the file is empty or not valid JSON
            ConfigValidationError: If a value fails model validation
        """
        content = PydanticPersistence.read_text(path)
        try:
            model = model_type.model_validate_json(content)
        except ValidationError as e:
            logger.error(f"Cannot load {model_type.__name__} from {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model

    @staticmethod
    def save_json(data: BaseModel, path: Path, indent: int = 2, backup: bool = True) -> None:
        """
        Write a model to disk atomically.

        Args:
            data: Model to serialize
            path: Destination file; parent directories are created
            indent: JSON indentation
            backup: Copy an existing file to `<path>.bak` first

        Raises:
            OSError: If the file cannot be written
            ConfigurationError: If the model cannot be serialized
        """
        kind = type(data).__name__
        try:
            content = data.model_dump_json(indent=indent)
        except Exception as e:
            raise ConfigurationError(
                user_message=f"Failed to save {path}",
                technical_message=f"Cannot serialize {kind}: {e}",
                recovery_hint="The previous version is still on disk.",
            ) from e

        path.parent.mkdir(parents=True, exist_ok=True)
        if backup and path.exists():
            shutil.copy2(path, _sibling(path, ".bak"))

        staging = _sibling(path, ".tmp")
        try:
            staging.write_text(content, encoding="utf-8")
            staging.replace(path)
        except OSError as e:
            logger.error(f"Cannot write {kind} to {path}: {e}")
            raise
        finally:
            staging.unlink(missing_ok=True)

        logger.debug(f"Saved {kind} to {path}")

    @staticmethod
    def load_json_or_default(
        path: Path, model_type: type[M], default_factory: Callable[[], M] | None = None
    ) -> M:
        """
        Like `load_json`, but a missing file yields a default model.

        The default is not written back. Broken files still raise.
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"{path} does not exist, using default {model_type.__name__}")
            return default_factory() if default_factory else model_type()
