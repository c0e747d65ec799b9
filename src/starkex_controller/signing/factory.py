"""Signer factory.

Returns the process-wide signing backend.
"""

import logging
from typing import Optional

from starkex_controller.signing.base import StarkSignerBackend

logger = logging.getLogger(__name__)

_signer_instance: Optional[StarkSignerBackend] = None


def get_signer() -> StarkSignerBackend:
    """Get the configured signer instance (singleton)."""
    global _signer_instance

    if _signer_instance is not None:
        return _signer_instance

    from starkex_controller.signing.local import LocalStarkSigner

    logger.info("Initializing local stark signer")
    _signer_instance = LocalStarkSigner()
    return _signer_instance


def reset_signer():
    """Reset the signer instance (for testing)."""
    global _signer_instance
    _signer_instance = None
