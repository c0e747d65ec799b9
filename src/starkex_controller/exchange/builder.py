"""Transaction builder for unsigned StarkExchange calls.

This service NEVER:
- Accesses private keys
- Signs transactions
- Broadcasts transactions

It ONLY prepares call data for the wallet to sign and submit.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from starkex_controller.contracts.transactions import UnsignedTransaction
from starkex_controller.exchange.abi import STARK_EXCHANGE_METHODS, method_signature

logger = logging.getLogger(__name__)


class TransactionBuildError(Exception):
    """Raised when call data cannot be built for a method."""
    pass


class TransactionBuilder(ABC):
    """Builds unsigned transactions for StarkExchange methods."""

    @abstractmethod
    async def build_transaction(
        self,
        contract_address: str,
        method: str,
        args: Sequence[Any],
    ) -> UnsignedTransaction:
        """Build an unsigned call of ``method`` with ``args``."""
        pass


class AbiTransactionBuilder(TransactionBuilder):
    """Encodes calls locally from the StarkExchange ABI."""

    def __init__(self, chain_id: int = 1):
        self.chain_id = chain_id

    def encode_call(self, method: str, args: Sequence[Any]) -> str:
        """Hex call data: selector + ABI-encoded arguments."""
        arg_types = STARK_EXCHANGE_METHODS.get(method)
        if arg_types is None:
            raise TransactionBuildError(f"Unknown StarkExchange method: {method}")
        if len(args) != len(arg_types):
            raise TransactionBuildError(
                f"{method} expects {len(arg_types)} arguments, got {len(args)}"
            )

        try:
            selector = function_signature_to_4byte_selector(method_signature(method))
            encoded = encode(arg_types, list(args))
        except Exception as e:
            raise TransactionBuildError(f"Failed to encode {method}: {e}") from e

        return "0x" + (selector + encoded).hex()

    async def build_transaction(
        self,
        contract_address: str,
        method: str,
        args: Sequence[Any],
    ) -> UnsignedTransaction:
        data = self.encode_call(method, args)
        to = to_checksum_address(contract_address)
        logger.debug(f"Built {method} call for {to}")

        return UnsignedTransaction(
            chain_id=self.chain_id,
            to=to,
            value="0x0",
            data=data,
            method=method,
            description=f"StarkExchange {method_signature(method)}",
        )
