"""RPC contracts: request/response envelopes and per-method params.

Field names are part of the wire contract and use camelCase. The legacy
spelling ``StarkPublicKey`` is accepted wherever ``starkPublicKey`` is.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, model_validator

from starkex_controller.contracts.tokens import Token
from starkex_controller.contracts.transactions import UnsignedTransaction
from starkex_controller.contracts.types import WIRE_CONFIG, Address, IntLike


def _stark_key_field(description: str = "Stark public key of the acting account"):
    return Field(
        ...,
        validation_alias=AliasChoices("starkPublicKey", "StarkPublicKey", "stark_public_key"),
        serialization_alias="starkPublicKey",
        description=description,
    )


# ======================
# Envelopes
# ======================


class RpcRequest(BaseModel):
    """Inbound request envelope."""

    id: int
    method: str
    params: dict[str, Any] = Field(default_factory=dict)


class RpcError(BaseModel):
    message: str


class RpcResponse(BaseModel):
    """Outbound response envelope.

    Exactly one of ``result`` / ``error`` is set. ``error_kind`` keeps the
    structured error kind for logging and tests; it never goes on the wire.
    """

    id: Any
    result: Optional[dict[str, Any]] = None
    error: Optional[RpcError] = None
    error_kind: Optional[str] = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "RpcResponse":
        if (self.result is None) == (self.error is None):
            raise ValueError("response must carry exactly one of result or error")
        return self

    def to_wire(self) -> dict[str, Any]:
        """JSON-serializable envelope."""
        if self.error is not None:
            return {"id": self.id, "error": self.error.model_dump()}
        return {"id": self.id, "result": self.result}


# ======================
# Params
# ======================


class AccountParams(BaseModel):
    """Params for stark_account.

    Either an explicit ``path`` or ``layer`` + ``application`` + ``index``
    (optionally with the owning ``ethereumAddress``).
    """

    model_config = WIRE_CONFIG

    path: Optional[str] = None
    layer: Optional[str] = None
    application: Optional[str] = None
    index: Optional[IntLike] = None
    ethereum_address: Optional[Address] = None

    @model_validator(mode="after")
    def _path_or_components(self) -> "AccountParams":
        if self.path:
            return self
        if not self.layer or not self.application or self.index is None:
            raise ValueError("either path or layer, application and index are required")
        return self


class RegisterParams(BaseModel):
    model_config = WIRE_CONFIG

    contract_address: Address
    stark_public_key: IntLike = _stark_key_field()
    operator_signature: str = Field(..., description="Operator signature (hex)")


class DepositParams(BaseModel):
    model_config = WIRE_CONFIG

    contract_address: Address
    stark_public_key: IntLike = _stark_key_field()
    quantized_amount: IntLike
    token: Token
    vault_id: IntLike


class DepositCancelParams(BaseModel):
    model_config = WIRE_CONFIG

    contract_address: Address
    stark_public_key: IntLike = _stark_key_field()
    token: Token
    vault_id: IntLike


class DepositReclaimParams(DepositCancelParams):
    pass


class TransferParty(BaseModel):
    model_config = WIRE_CONFIG

    stark_public_key: IntLike = _stark_key_field()
    vault_id: IntLike


class TransferParams(BaseModel):
    model_config = WIRE_CONFIG

    sender: TransferParty = Field(..., alias="from")
    receiver: TransferParty = Field(..., alias="to")
    token: Token
    quantized_amount: IntLike
    nonce: IntLike
    expiration_timestamp: IntLike


class OrderSide(BaseModel):
    model_config = WIRE_CONFIG

    vault_id: IntLike
    quantized_amount: IntLike
    token: Token


class CreateOrderParams(BaseModel):
    model_config = WIRE_CONFIG

    stark_public_key: IntLike = _stark_key_field()
    sell: OrderSide
    buy: OrderSide
    nonce: IntLike
    expiration_timestamp: IntLike


class WithdrawalParams(BaseModel):
    model_config = WIRE_CONFIG

    contract_address: Address
    stark_public_key: IntLike = _stark_key_field()
    token: Token


class FullWithdrawalParams(BaseModel):
    model_config = WIRE_CONFIG

    contract_address: Address
    stark_public_key: IntLike = _stark_key_field()
    vault_id: IntLike


class FreezeParams(FullWithdrawalParams):
    pass


class VerifyEscapeParams(BaseModel):
    model_config = WIRE_CONFIG

    contract_address: Address
    stark_public_key: IntLike = _stark_key_field()
    proof: list[IntLike]


class EscapeParams(BaseModel):
    model_config = WIRE_CONFIG

    contract_address: Address
    stark_public_key: IntLike = _stark_key_field()
    vault_id: IntLike
    token: Token
    quantized_amount: IntLike


# ======================
# Results
# ======================


class AccountResult(BaseModel):
    model_config = WIRE_CONFIG

    stark_public_key: str


class SignatureResult(BaseModel):
    model_config = WIRE_CONFIG

    stark_signature: str


class TransactionResult(BaseModel):
    model_config = WIRE_CONFIG

    transaction: UnsignedTransaction
