"""Local signing backend.

Derives and signs in-process with starknet-py's STARK curve primitives.
Private scalars exist only in memory for the duration of a call.
"""

import logging

from starknet_py.hash.utils import (
    message_signature,
    private_to_stark_key,
    verify_message_signature,
)

from starkex_controller.hdwallet.base import StarkKeyPair
from starkex_controller.hdwallet.stark import derive_private_key
from starkex_controller.signing.base import SigningError, StarkSignature, StarkSignerBackend

logger = logging.getLogger(__name__)


class LocalStarkSigner(StarkSignerBackend):
    """In-process signer for stark keys derived from a seed phrase."""

    async def derive_key_pair(self, mnemonic: str, path: str) -> StarkKeyPair:
        try:
            private_key = derive_private_key(mnemonic, path)
        except ValueError as e:
            raise SigningError(str(e)) from e

        public_key = await self.derive_public_identity(private_key)
        logger.debug(f"Derived stark key pair for {path}")
        return StarkKeyPair(path=path, private_key=private_key, public_key=public_key)

    async def derive_public_identity(self, private_key: int) -> int:
        try:
            return private_to_stark_key(private_key)
        except Exception as e:
            raise SigningError(f"Public key derivation failed: {e}") from e

    async def sign(self, key_pair: StarkKeyPair, msg_hash: int) -> StarkSignature:
        try:
            r, s = message_signature(msg_hash, key_pair.private_key)
        except Exception as e:
            logger.error(f"Local signing failed for {key_pair.path}: {e}")
            raise SigningError(f"Signing failed: {e}") from e

        return StarkSignature(r=r, s=s)

    async def verify(self, public_key: int, msg_hash: int, signature: StarkSignature) -> bool:
        return verify_message_signature(msg_hash, [signature.r, signature.s], public_key)
