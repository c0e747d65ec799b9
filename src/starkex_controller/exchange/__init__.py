"""StarkExchange transaction building."""

from starkex_controller.exchange.abi import STARK_EXCHANGE_METHODS
from starkex_controller.exchange.builder import (
    AbiTransactionBuilder,
    TransactionBuildError,
    TransactionBuilder,
)

__all__ = [
    "AbiTransactionBuilder",
    "STARK_EXCHANGE_METHODS",
    "TransactionBuildError",
    "TransactionBuilder",
]
