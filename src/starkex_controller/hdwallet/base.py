"""Stark key pair types.

A key pair lives on the STARK curve. Its public identity (the "stark
public key") is the x coordinate of the public point.
"""

from dataclasses import dataclass, field

# Order of the STARK curve generator
EC_ORDER = 0x0800000000000010FFFFFFFFFFFFFFFFB781126DCAE7B2321E66A241ADC64D2F


def format_stark_key(value: int) -> str:
    """Format a field element as a 0x-prefixed, 64 digit hex string."""
    return "0x" + format(value, "064x")


def format_private_key(value: int) -> str:
    """Serialized form of a private scalar, as persisted in the account mapping."""
    return "0x" + format(value, "064x")


def parse_private_key(value: str) -> int:
    """Parse a persisted private scalar."""
    scalar = int(value, 16)
    if not 0 < scalar < EC_ORDER:
        raise ValueError("Private key out of range for the STARK curve")
    return scalar


@dataclass(frozen=True)
class StarkKeyPair:
    """Key pair derived for one derivation path.

    Attributes:
        path: Derivation path the pair was derived from
        private_key: Private scalar (never leaves the key store)
        public_key: Stark public key (x coordinate of the public point)
    """

    path: str
    private_key: int = field(repr=False)
    public_key: int

    @property
    def stark_public_key(self) -> str:
        return format_stark_key(self.public_key)
