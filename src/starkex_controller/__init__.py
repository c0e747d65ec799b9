"""Starkware key controller: stark key management, signing and RPC dispatch."""

from starkex_controller.controller import StarkwareController, create_controller
from starkex_controller.errors import (
    CollaboratorError,
    ControllerError,
    IdentityMismatchError,
    InvalidParamsError,
    NoActiveKeyError,
    UnknownMethodError,
)

__version__ = "0.1.0"

__all__ = [
    "CollaboratorError",
    "ControllerError",
    "IdentityMismatchError",
    "InvalidParamsError",
    "NoActiveKeyError",
    "StarkwareController",
    "UnknownMethodError",
    "create_controller",
]
