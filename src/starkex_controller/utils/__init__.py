"""Utility modules for the Starkware controller."""

from starkex_controller.utils.locks import LockTimeoutError, StoreLock

__all__ = ["LockTimeoutError", "StoreLock"]
