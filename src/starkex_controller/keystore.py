"""Account key store.

Owns the path -> private key mapping, the single active key pair and the
synchronization with the persistence collaborator.

Invariants:
- The mapping is loaded from the store at most once per instance.
- The active path, when set, is always a key of the mapping.
- After a new derivation the persisted mapping contains every cached
  path; if persisting fails the derivation is rolled back and the
  failure is raised.
"""

import logging
from typing import Optional

from starkex_controller.errors import CollaboratorError, NoActiveKeyError
from starkex_controller.hdwallet.base import (
    StarkKeyPair,
    format_private_key,
    format_stark_key,
    parse_private_key,
)
from starkex_controller.hdwallet.stark import get_ethereum_address
from starkex_controller.signing.base import StarkSignerBackend
from starkex_controller.storage.base import Store
from starkex_controller.utils.locks import StoreLock

logger = logging.getLogger(__name__)


class AccountKeyStore:
    """Path-addressed cache of stark key pairs derived from one seed phrase.

    Usage:
        keystore = AccountKeyStore(store, signer, mnemonic)
        key_pair = await keystore.get_key_pair("m/2645'/...")
        active = await keystore.get_key_pair()
    """

    def __init__(
        self,
        store: Store,
        signer: StarkSignerBackend,
        mnemonic: str,
        mapping_key: str = "STARKWARE_ACCOUNT_MAPPING",
        lock_timeout: Optional[float] = None,
    ):
        self.store = store
        self.signer = signer
        self.mapping_key = mapping_key
        self._mnemonic = mnemonic
        self._mapping: Optional[dict[str, str]] = None
        self._active_path: Optional[str] = None
        self._ethereum_address: Optional[str] = None
        self._lock = StoreLock(mapping_key, timeout=lock_timeout)

    @property
    def loaded(self) -> bool:
        return self._mapping is not None

    @property
    def active_path(self) -> Optional[str]:
        return self._active_path

    async def ensure_loaded(self) -> None:
        """Load the mapping from the store unless already loaded.

        When the loaded mapping is non-empty and nothing is active yet, the
        first stored path becomes active.

        Raises:
            CollaboratorError: If the store read fails or returns garbage
        """
        if self._mapping is not None:
            return

        async with self._lock.hold("load"):
            # Another task may have loaded while we waited
            if self._mapping is not None:
                return

            try:
                raw = await self.store.get(self.mapping_key)
            except Exception as e:
                raise CollaboratorError("store", f"could not load account mapping: {e}") from e

            if raw is None:
                raw = {}
            if not isinstance(raw, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in raw.items()
            ):
                raise CollaboratorError("store", f"malformed account mapping under {self.mapping_key}")

            self._mapping = dict(raw)
            if self._mapping and self._active_path is None:
                self._active_path = next(iter(self._mapping))

            logger.info(f"Loaded account mapping with {len(self._mapping)} path(s)")

    async def get_mapping(self) -> dict[str, str]:
        """Return a copy of the account mapping (path -> private key hex)."""
        await self.ensure_loaded()
        return dict(self._mapping)

    async def get_active_key_pair(self) -> StarkKeyPair:
        """Return the active key pair.

        Raises:
            NoActiveKeyError: If no key pair is active
        """
        await self.ensure_loaded()
        if self._active_path is None:
            raise NoActiveKeyError()
        return await self._restore(self._active_path, self._mapping[self._active_path])

    async def get_key_pair(self, path: Optional[str] = None) -> StarkKeyPair:
        """Resolve a key pair.

        Args:
            path: Derivation path. When omitted the active key pair is used.
                A known path is rebuilt from its stored scalar without
                changing the active key pair. An unknown path is derived,
                persisted and becomes active.

        Raises:
            NoActiveKeyError: If path is omitted and nothing is active
            CollaboratorError: If derivation or persistence fails
        """
        if not path:
            return await self.get_active_key_pair()

        await self.ensure_loaded()
        stored = self._mapping.get(path)
        if stored is not None:
            logger.debug(f"Key pair cache hit for {path}")
            return await self._restore(path, stored)

        return await self._derive_and_store(path)

    async def get_stark_public_key(self, path: Optional[str] = None) -> str:
        """Resolve a key pair and return only its stark public key."""
        key_pair = await self.get_key_pair(path)
        return format_stark_key(key_pair.public_key)

    def get_ethereum_address(self) -> str:
        """Owning Ethereum address of the wallet (m/44'/60'/0'/0/0)."""
        if self._ethereum_address is None:
            try:
                self._ethereum_address = get_ethereum_address(self._mnemonic)
            except ValueError as e:
                raise CollaboratorError("signer", str(e)) from e
        return self._ethereum_address

    async def reset(self) -> None:
        """Forget every cached and persisted key pair."""
        async with self._lock.hold("reset"):
            try:
                await self.store.remove(self.mapping_key)
            except Exception as e:
                raise CollaboratorError("store", f"could not remove account mapping: {e}") from e

            self._mapping = {}
            self._active_path = None
            logger.info(f"Account mapping {self.mapping_key} cleared")

    async def _restore(self, path: str, stored: str) -> StarkKeyPair:
        try:
            private_key = parse_private_key(stored)
            return await self.signer.key_pair_from_private_key(path, private_key)
        except Exception as e:
            raise CollaboratorError("signer", f"could not restore key pair for {path}: {e}") from e

    async def _derive_and_store(self, path: str) -> StarkKeyPair:
        async with self._lock.hold("derive"):
            # Derived by a concurrent request while we waited
            stored = self._mapping.get(path)
            if stored is not None:
                return await self._restore(path, stored)

            try:
                key_pair = await self.signer.derive_key_pair(self._mnemonic, path)
            except Exception as e:
                raise CollaboratorError("signer", f"could not derive key pair for {path}: {e}") from e

            previous_active = self._active_path
            self._mapping[path] = format_private_key(key_pair.private_key)
            self._active_path = path

            try:
                await self.store.set(self.mapping_key, dict(self._mapping))
            except Exception as e:
                del self._mapping[path]
                self._active_path = previous_active
                logger.error(f"Persisting account mapping failed, rolled back {path}: {e}")
                raise CollaboratorError("store", f"could not persist account mapping: {e}") from e

            logger.info(f"Derived and persisted stark key {key_pair.stark_public_key} for {path}")
            return key_pair
