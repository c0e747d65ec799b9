"""Stark signing services."""

from starkex_controller.signing.base import (
    SigningError,
    StarkSignature,
    StarkSignerBackend,
)
from starkex_controller.signing.factory import get_signer, reset_signer
from starkex_controller.signing.local import LocalStarkSigner

__all__ = [
    "LocalStarkSigner",
    "SigningError",
    "StarkSignature",
    "StarkSignerBackend",
    "get_signer",
    "reset_signer",
]
