"""RPC dispatcher.

Decodes a request envelope into the method's typed params, invokes the
matching handler and wraps the outcome into a response envelope. This is
the only place where errors are caught: every failure becomes
``{"id": ..., "error": {"message": ...}}``.
"""

import logging
from typing import Any, NamedTuple

from pydantic import BaseModel, ValidationError

from starkex_controller.contracts import rpc
from starkex_controller.contracts.rpc import RpcError, RpcRequest, RpcResponse
from starkex_controller.errors import ControllerError, InvalidParamsError, UnknownMethodError
from starkex_controller.services.operations import StarkOperations

logger = logging.getLogger(__name__)


class MethodSpec(NamedTuple):
    params_model: type[BaseModel]
    handler: str


# Stable external method names; renaming one is a protocol change
METHODS: dict[str, MethodSpec] = {
    "stark_account": MethodSpec(rpc.AccountParams, "account"),
    "stark_register": MethodSpec(rpc.RegisterParams, "register"),
    "stark_deposit": MethodSpec(rpc.DepositParams, "deposit"),
    "stark_depositCancel": MethodSpec(rpc.DepositCancelParams, "deposit_cancel"),
    "stark_depositReclaim": MethodSpec(rpc.DepositReclaimParams, "deposit_reclaim"),
    "stark_transfer": MethodSpec(rpc.TransferParams, "transfer"),
    "stark_createOrder": MethodSpec(rpc.CreateOrderParams, "create_order"),
    "stark_withdrawal": MethodSpec(rpc.WithdrawalParams, "withdrawal"),
    "stark_fullWithdrawal": MethodSpec(rpc.FullWithdrawalParams, "full_withdrawal"),
    "stark_freeze": MethodSpec(rpc.FreezeParams, "freeze"),
    "stark_verifyEscape": MethodSpec(rpc.VerifyEscapeParams, "verify_escape"),
    "stark_escape": MethodSpec(rpc.EscapeParams, "escape"),
}


def get_supported_methods() -> list[str]:
    return list(METHODS.keys())


def _validation_message(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "params"
        problems.append(f"{location}: {item['msg']}")
    return "Invalid params: " + "; ".join(problems)


class RpcDispatcher:
    """Routes request envelopes to StarkOperations handlers."""

    def __init__(self, operations: StarkOperations):
        self.operations = operations

    async def resolve(self, payload: Any) -> dict[str, Any]:
        """Resolve a raw request envelope to a JSON-serializable response."""
        response = await self.dispatch(payload)
        return response.to_wire()

    async def dispatch(self, payload: Any) -> RpcResponse:
        """Resolve a raw request envelope, keeping the structured error kind."""
        request_id = payload.get("id") if isinstance(payload, dict) else None

        try:
            result = await self._invoke(payload)
        except Exception as e:
            return self._error_response(request_id, e)

        return RpcResponse(id=request_id, result=result)

    async def _invoke(self, payload: Any) -> dict[str, Any]:
        try:
            request = RpcRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidParamsError(f"Malformed request envelope: {_validation_message(e)}") from e

        entry = METHODS.get(request.method)
        if entry is None:
            raise UnknownMethodError(request.method)

        try:
            params = entry.params_model.model_validate(request.params)
        except ValidationError as e:
            raise InvalidParamsError(_validation_message(e)) from e

        logger.debug(f"Dispatching {request.method} (id={request.id})")
        handler = getattr(self.operations, entry.handler)
        result = await handler(params)
        return result.model_dump(mode="json", by_alias=True)

    @staticmethod
    def _error_response(request_id: Any, error: Exception) -> RpcResponse:
        if isinstance(error, ControllerError):
            kind = error.kind
            logger.warning(f"Request {request_id} failed [{kind}]: {error}")
        else:
            kind = "InternalError"
            logger.exception(f"Request {request_id} failed with unexpected error")

        message = str(error) or type(error).__name__
        return RpcResponse(id=request_id, error=RpcError(message=message), error_kind=kind)
