"""Starkware controller.

Wires the key store, identity guard, operation handlers and dispatcher
for one wallet.
"""

import logging
from typing import Any, Optional

from starkex_controller.config import Settings, get_settings
from starkex_controller.exchange.builder import AbiTransactionBuilder, TransactionBuilder
from starkex_controller.guard import IdentityGuard
from starkex_controller.keystore import AccountKeyStore
from starkex_controller.services.dispatcher import RpcDispatcher
from starkex_controller.services.operations import StarkOperations
from starkex_controller.signing.base import StarkSignerBackend
from starkex_controller.signing.factory import get_signer
from starkex_controller.storage.base import Store
from starkex_controller.storage.memory import MemoryStore

logger = logging.getLogger(__name__)


class StarkwareController:
    """Manages stark keys for one seed phrase and serves Starkware RPC calls.

    Usage:
        controller = StarkwareController(mnemonic, MemoryStore())
        response = await controller.resolve(
            {"id": 1, "method": "stark_account", "params": {"path": "m/2645'/..."}}
        )
    """

    def __init__(
        self,
        mnemonic: str,
        store: Store,
        signer: Optional[StarkSignerBackend] = None,
        tx_builder: Optional[TransactionBuilder] = None,
        mapping_key: str = "STARKWARE_ACCOUNT_MAPPING",
        chain_id: int = 1,
        lock_timeout: Optional[float] = None,
    ):
        self.signer = signer or get_signer()
        self.tx_builder = tx_builder or AbiTransactionBuilder(chain_id=chain_id)
        self.keystore = AccountKeyStore(
            store,
            self.signer,
            mnemonic,
            mapping_key=mapping_key,
            lock_timeout=lock_timeout,
        )
        self.guard = IdentityGuard(self.keystore)
        self.operations = StarkOperations(self.keystore, self.guard, self.signer, self.tx_builder)
        self.dispatcher = RpcDispatcher(self.operations)

    async def init(self) -> None:
        """Load the persisted account mapping ahead of the first request."""
        await self.keystore.ensure_loaded()

    async def resolve(self, payload: Any) -> dict[str, Any]:
        """Resolve a request envelope into a response envelope."""
        return await self.dispatcher.resolve(payload)


def create_controller(
    settings: Optional[Settings] = None,
    store: Optional[Store] = None,
) -> StarkwareController:
    """Create a controller from settings.

    Raises:
        RuntimeError: If no seed phrase is configured
    """
    settings = settings or get_settings()
    if not settings.has_wallet:
        raise RuntimeError("WALLET_SEED_PHRASE is not configured")

    if store is None:
        logger.warning("No store configured - account mapping is kept in memory only")
        store = MemoryStore()

    return StarkwareController(
        settings.wallet_seed_phrase,
        store,
        mapping_key=settings.account_mapping_key,
        chain_id=settings.chain_id,
        lock_timeout=settings.lock_timeout or None,
    )
