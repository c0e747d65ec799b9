"""Account derivation paths.

Path layout (EIP-2645):
    m/2645'/layer'/application'/eth_address_1'/eth_address_2'/index

layer and application are the low 31 bits of sha256 of their names,
eth_address_1 and eth_address_2 are the low 31 bits and the next 31 bits
of the owning Ethereum address.
"""

import hashlib
from typing import Union

EIP2645_PURPOSE = 2645

_MASK_31 = (1 << 31) - 1


def _int_from_name(name: str) -> int:
    digest = hashlib.sha256(name.encode()).digest()
    return int.from_bytes(digest, "big") & _MASK_31


def get_account_path(
    layer: str,
    application: str,
    ethereum_address: str,
    index: Union[int, str],
) -> str:
    """Build the derivation path for an account.

    Args:
        layer: Layer name, e.g. "starkex"
        application: Application name, e.g. "starkexdvf"
        ethereum_address: 0x-prefixed owning Ethereum address
        index: Account index (non-hardened)

    Returns:
        Derivation path string

    Raises:
        ValueError: If the address or index is malformed
    """
    if not layer or not application:
        raise ValueError("layer and application are required")

    address = ethereum_address.lower()
    if address.startswith("0x"):
        address = address[2:]
    if len(address) != 40:
        raise ValueError(f"Invalid Ethereum address: {ethereum_address}")
    address_int = int(address, 16)

    index_int = int(index)
    if not 0 <= index_int <= _MASK_31:
        raise ValueError(f"Account index out of range: {index}")

    layer_int = _int_from_name(layer)
    application_int = _int_from_name(application)
    eth_1 = address_int & _MASK_31
    eth_2 = (address_int >> 31) & _MASK_31

    return (
        f"m/{EIP2645_PURPOSE}'/{layer_int}'/{application_int}'"
        f"/{eth_1}'/{eth_2}'/{index_int}"
    )
