"""Controller services: operation handlers and RPC dispatch."""

from starkex_controller.services.dispatcher import METHODS, RpcDispatcher, get_supported_methods
from starkex_controller.services.operations import StarkOperations

__all__ = [
    "METHODS",
    "RpcDispatcher",
    "StarkOperations",
    "get_supported_methods",
]
