"""Base interface for the stark signing backend.

Signing flow:
1. Key store resolves the acting key pair
2. Message builder produces the message hash
3. Signer returns (r, s); the private scalar never leaves the backend call
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from starkex_controller.hdwallet.base import StarkKeyPair

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StarkSignature:
    """ECDSA signature over the STARK curve."""

    r: int
    s: int


class StarkSignerBackend(ABC):
    """Abstract signing backend over the STARK curve.

    Implementations must be deterministic: identical inputs give identical
    key pairs and signatures.
    """

    @abstractmethod
    async def derive_key_pair(self, mnemonic: str, path: str) -> StarkKeyPair:
        """Derive the key pair for a path from the master secret."""
        pass

    @abstractmethod
    async def derive_public_identity(self, private_key: int) -> int:
        """Compute the stark public key for a private scalar."""
        pass

    @abstractmethod
    async def sign(self, key_pair: StarkKeyPair, msg_hash: int) -> StarkSignature:
        """Sign a message hash with a key pair."""
        pass

    @abstractmethod
    async def verify(self, public_key: int, msg_hash: int, signature: StarkSignature) -> bool:
        """Verify a signature against a stark public key."""
        pass

    async def key_pair_from_private_key(self, path: str, private_key: int) -> StarkKeyPair:
        """Rebuild a key pair from its persisted private scalar."""
        public_key = await self.derive_public_identity(private_key)
        return StarkKeyPair(path=path, private_key=private_key, public_key=public_key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class SigningError(Exception):
    """Exception raised when signing or key derivation fails."""
    pass
