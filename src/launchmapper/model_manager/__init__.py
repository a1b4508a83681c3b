"""Generic helpers shared by the engine and the configuration layer.

- **ObserverManager**: observer list with isolated, synchronous notification
- **PydanticPersistence**: loading/saving Pydantic models to JSON
"""

from launchmapper.model_manager.observer import ObserverManager
from launchmapper.model_manager.persistence import PydanticPersistence

__all__ = [
    "ObserverManager",
    "PydanticPersistence",
]
