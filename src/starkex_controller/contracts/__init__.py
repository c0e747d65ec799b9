"""Wire contracts for the Starkware RPC surface."""

from starkex_controller.contracts.rpc import RpcError, RpcRequest, RpcResponse
from starkex_controller.contracts.tokens import Token
from starkex_controller.contracts.transactions import UnsignedTransaction

__all__ = [
    "RpcError",
    "RpcRequest",
    "RpcResponse",
    "Token",
    "UnsignedTransaction",
]
