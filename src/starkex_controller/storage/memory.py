"""In-memory store for development and tests."""

import copy
from typing import Any, Optional

from starkex_controller.storage.base import Store


class MemoryStore(Store):
    """Dict-backed store.

    Values are deep-copied on the way in and out, so callers never share
    mutable state with what is "persisted".
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data
