"""Display helpers for wallet confirmation screens.

Each helper returns label/value rows, e.g.
    [{"label": "Sell Asset", "value": "ERC20 Token"}, ...]
"""

from decimal import Decimal
from typing import Optional

from starkex_controller.contracts.tokens import Token

TOKEN_KIND_LABELS = {
    "ETH": "Ether",
    "ERC20": "ERC20 Token",
    "MINTABLE_ERC20": "Mintable ERC20 Token",
    "ERC721": "ERC721 NFT",
}


def format_signature(r: int, s: int) -> str:
    """Serialize a signature as 0x + r + s, each 64 hex digits."""
    return "0x" + format(r, "064x") + format(s, "064x")


def format_label_prefix(label: str, label_prefix: Optional[str] = None) -> str:
    return f"{label_prefix} {label}" if label_prefix else label


def format_token_label(token: Token, label_prefix: Optional[str] = None) -> list[dict]:
    label = format_label_prefix("Asset", label_prefix)
    rows = [{"label": label, "value": TOKEN_KIND_LABELS.get(token.type, "Unknown")}]

    if token.type in ("ERC20", "MINTABLE_ERC20"):
        rows.append({
            "label": format_label_prefix("Token Address", label_prefix),
            "value": token.data.token_address,
        })
    elif token.type == "ERC721":
        rows.append({
            "label": format_label_prefix("Token ID", label_prefix),
            "value": str(token.data.token_id),
        })
    return rows


def format_token_amount(quantized_amount: int, token: Token) -> str:
    """Convert a quantized amount to base units (quantized_amount * quantum).

    NFTs have no quantum; their amount is returned unchanged.
    """
    quantum = getattr(token.data, "quantum", None)
    if not quantum:
        return str(quantized_amount)
    return str(Decimal(quantized_amount) * Decimal(quantum))


def format_token_amount_label(
    quantized_amount: int,
    token: Token,
    label_prefix: Optional[str] = None,
) -> list[dict]:
    return [
        *format_token_label(token, label_prefix),
        {
            "label": format_label_prefix("Amount", label_prefix),
            "value": format_token_amount(quantized_amount, token),
        },
    ]
