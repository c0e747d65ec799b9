"""Unsigned transaction contract.

The controller only prepares call data. The caller is responsible for:
1. Signing this transaction with the wallet key
2. Broadcasting the signed transaction to the network
"""

from pydantic import BaseModel, Field

from starkex_controller.contracts.types import WIRE_CONFIG


class UnsignedTransaction(BaseModel):
    """An unsigned call to the StarkExchange contract."""

    model_config = WIRE_CONFIG

    chain_id: int = Field(..., description="EVM chain ID")
    to: str = Field(..., description="StarkExchange contract address")
    value: str = Field(default="0x0", description="Value in wei (hex)")
    data: str = Field(..., description="ABI encoded call data (hex)")
    method: str = Field(..., description="Contract method being called")
    description: str = Field(default="", description="Human-readable description")
