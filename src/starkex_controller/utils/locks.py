"""Concurrency control for the account key store.

Each key store owns one lock; loading and derive-and-persist sequences
run while holding it.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from starkex_controller.errors import ControllerError

logger = logging.getLogger(__name__)


class LockTimeoutError(ControllerError):
    """Raised when a lock cannot be acquired within the timeout period."""

    kind = "LockTimeout"


class StoreLock:
    """Mutual exclusion for one key store, with an optional acquire timeout.

    Example:
        lock = StoreLock("STARKWARE_ACCOUNT_MAPPING", timeout=5.0)
        async with lock.hold("derive"):
            ...
    """

    def __init__(self, name: str, timeout: Optional[float] = None):
        """Initialize the lock.

        Args:
            name: Identifier used in log lines (usually the mapping key)
            timeout: Maximum time to wait for the lock (None or 0 = wait forever)
        """
        self.name = name
        self.timeout = timeout
        self._lock = asyncio.Lock()

    def locked(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def hold(self, operation: str = "keystore_operation"):
        """Hold the lock for the duration of the block.

        Args:
            operation: Description of the operation for logging

        Raises:
            LockTimeoutError: If the lock is not acquired in time
        """
        try:
            if self.timeout:
                await asyncio.wait_for(self._lock.acquire(), timeout=self.timeout)
            else:
                await self._lock.acquire()
        except asyncio.TimeoutError:
            logger.warning(
                f"Lock timeout for {self.name} after {self.timeout}s: {operation}"
            )
            raise LockTimeoutError(
                f"Could not acquire lock for {self.name} within {self.timeout}s"
            )

        logger.debug(f"Lock acquired for {self.name}: {operation}")
        try:
            yield
        finally:
            self._lock.release()
            logger.debug(f"Lock released for {self.name}: {operation}")
