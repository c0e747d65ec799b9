"""Deterministic stark key derivation from a BIP39 seed phrase.

Derivation:
1. BIP39 seed from the mnemonic
2. BIP32 (secp256k1) child private key at the account path
3. Grind the child key into the STARK curve order
"""

import hashlib
import logging

from bip_utils import (
    Bip32Secp256k1,
    Bip39SeedGenerator,
    Bip44,
    Bip44Changes,
    Bip44Coins,
)
from eth_utils import to_checksum_address

from starkex_controller.hdwallet.base import EC_ORDER

logger = logging.getLogger(__name__)

# sha256 output is bounded by 2**256
_SHA256_MAX_DIGEST = 1 << 256


def _hash_key_with_index(key: bytes, index: int) -> int:
    index_bytes = index.to_bytes(max(1, (index.bit_length() + 7) // 8), "big")
    return int.from_bytes(hashlib.sha256(key + index_bytes).digest(), "big")


def grind_key(key_seed: bytes, key_value_limit: int = EC_ORDER) -> int:
    """Map arbitrary key material uniformly into [0, key_value_limit).

    Hashes the seed with an increasing index until the digest falls below
    the largest multiple of the limit, so the final modulo is unbiased.
    """
    max_allowed = _SHA256_MAX_DIGEST - (_SHA256_MAX_DIGEST % key_value_limit)
    index = 0
    key = _hash_key_with_index(key_seed, index)
    while key >= max_allowed:
        index += 1
        key = _hash_key_with_index(key_seed, index)
    return key % key_value_limit


def derive_private_key(mnemonic: str, path: str) -> int:
    """Derive the stark private scalar for a path.

    Args:
        mnemonic: BIP39 seed phrase
        path: Derivation path (see hdwallet.paths)

    Returns:
        Private scalar on the STARK curve

    Raises:
        ValueError: If the mnemonic or path is invalid
    """
    try:
        seed = Bip39SeedGenerator(mnemonic).Generate()
        child = Bip32Secp256k1.FromSeedAndPath(seed, path)
    except Exception as e:
        raise ValueError(f"Key derivation failed for {path}: {e}") from e

    child_key = child.PrivateKey().Raw().ToBytes()
    return grind_key(child_key, EC_ORDER)


def get_ethereum_address(mnemonic: str, index: int = 0) -> str:
    """Get the wallet's Ethereum address at m/44'/60'/0'/0/index.

    This is the default owner address used in account paths.
    """
    try:
        seed = Bip39SeedGenerator(mnemonic).Generate()
        bip44 = Bip44.FromSeed(seed, Bip44Coins.ETHEREUM)
        address = (
            bip44.Purpose()
            .Coin()
            .Account(0)
            .Change(Bip44Changes.CHAIN_EXT)
            .AddressIndex(index)
            .PublicKey()
            .ToAddress()
        )
    except Exception as e:
        raise ValueError(f"Ethereum address derivation failed: {e}") from e

    return to_checksum_address(address)
