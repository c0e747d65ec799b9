"""HD wallet module for deterministic stark key derivation."""

from starkex_controller.hdwallet.base import (
    EC_ORDER,
    StarkKeyPair,
    format_private_key,
    format_stark_key,
    parse_private_key,
)
from starkex_controller.hdwallet.paths import get_account_path
from starkex_controller.hdwallet.stark import (
    derive_private_key,
    get_ethereum_address,
    grind_key,
)

__all__ = [
    "EC_ORDER",
    "StarkKeyPair",
    "derive_private_key",
    "format_private_key",
    "format_stark_key",
    "get_account_path",
    "get_ethereum_address",
    "grind_key",
    "parse_private_key",
]
