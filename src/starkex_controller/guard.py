"""Identity guard for state-mutating operations."""

import logging
from typing import Union

from starkex_controller.contracts.types import parse_int
from starkex_controller.errors import IdentityMismatchError
from starkex_controller.hdwallet.base import StarkKeyPair
from starkex_controller.keystore import AccountKeyStore

logger = logging.getLogger(__name__)


class IdentityGuard:
    """Checks that a claimed stark public key is the active key pair's.

    The check always resolves the active key pair (no path) and never
    derives or mutates the key store beyond its lazy load.
    """

    def __init__(self, keystore: AccountKeyStore):
        self.keystore = keystore

    async def assert_identity(self, claimed: Union[int, str]) -> StarkKeyPair:
        """Raise unless ``claimed`` matches the active stark public key.

        Returns:
            The verified active key pair. Callers act with this pair so a
            concurrent change of the active key cannot slip in between.

        Raises:
            IdentityMismatchError: On mismatch or unparsable claim
            NoActiveKeyError: If no key pair is active
        """
        active = await self.keystore.get_active_key_pair()

        try:
            claimed_int = parse_int(claimed)
        except ValueError:
            raise IdentityMismatchError(f"Unparsable starkPublicKey: {claimed!r}")

        if claimed_int != active.public_key:
            logger.warning(
                f"Identity mismatch: claimed {hex(claimed_int)}, active {active.stark_public_key}"
            )
            raise IdentityMismatchError()

        return active
