"""Persistence collaborators for the account mapping."""

from starkex_controller.storage.base import Store
from starkex_controller.storage.memory import MemoryStore

__all__ = ["MemoryStore", "Store"]
