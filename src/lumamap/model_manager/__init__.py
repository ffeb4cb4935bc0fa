"""Generic helpers for managing Pydantic models.

- **PydanticPersistence**: load/save models as JSON with backups and atomic writes
- **ObserverManager**: thread-safe observer list used by every event source
"""

from lumamap.model_manager.observer import ObserverManager
from lumamap.model_manager.persistence import PydanticPersistence

__all__ = [
    "ObserverManager",
    "PydanticPersistence",
]
