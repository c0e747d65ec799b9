"""Shared field types for wire contracts.

Quantities travel as JSON integers, decimal strings or 0x hex strings;
they are normalized to int once, when the params are decoded.
"""

from typing import Annotated, Any

from eth_utils import is_address, to_checksum_address
from pydantic import BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def parse_int(value: Any) -> int:
    """Parse an integer given as int, decimal string or 0x hex string."""
    if isinstance(value, bool):
        raise ValueError("booleans are not integers")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        if text.isdigit():
            return int(text)
    raise ValueError(f"not an integer: {value!r}")


def parse_non_negative_int(value: Any) -> int:
    parsed = parse_int(value)
    if parsed < 0:
        raise ValueError(f"must not be negative: {value!r}")
    return parsed


def parse_address(value: Any) -> str:
    if not isinstance(value, str) or not is_address(value):
        raise ValueError(f"not an Ethereum address: {value!r}")
    return to_checksum_address(value)


IntLike = Annotated[int, BeforeValidator(parse_non_negative_int)]
Address = Annotated[str, BeforeValidator(parse_address)]

# camelCase on the wire, snake_case in Python
WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)
