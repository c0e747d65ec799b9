"""Persistence collaborator interface.

The controller persists one JSON-serializable value: the account mapping.
Implementations may suspend and may raise; any exception is treated as
fatal to the current call.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class Store(ABC):
    """Async key/value store."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the value for key, or None if absent."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        pass
