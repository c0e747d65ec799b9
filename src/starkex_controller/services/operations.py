"""Stark operation handlers.

Each handler:
1. Checks the claimed identity against the active key pair (all but
   account and register)
2. Acts as the key pair the check verified
3. Either builds an unsigned StarkExchange call, or builds a message,
   signs it and serializes the signature

Only ``account`` may derive a key pair for a new path. Every other
handler acts as the active key pair.
"""

import logging
from typing import Any, Sequence

from starkex_controller.contracts.rpc import (
    AccountParams,
    AccountResult,
    CreateOrderParams,
    DepositCancelParams,
    DepositParams,
    DepositReclaimParams,
    EscapeParams,
    FreezeParams,
    FullWithdrawalParams,
    RegisterParams,
    SignatureResult,
    TransactionResult,
    TransferParams,
    VerifyEscapeParams,
    WithdrawalParams,
)
from starkex_controller.errors import CollaboratorError, InvalidParamsError
from starkex_controller.exchange.builder import TransactionBuilder
from starkex_controller.formatting import format_signature
from starkex_controller.guard import IdentityGuard
from starkex_controller.hdwallet.base import StarkKeyPair
from starkex_controller.hdwallet.paths import get_account_path
from starkex_controller.keystore import AccountKeyStore
from starkex_controller.messages import get_limit_order_msg, get_transfer_msg, hash_token_id
from starkex_controller.signing.base import StarkSignerBackend

logger = logging.getLogger(__name__)


class StarkOperations:
    """Typed handlers for every Starkware RPC operation."""

    def __init__(
        self,
        keystore: AccountKeyStore,
        guard: IdentityGuard,
        signer: StarkSignerBackend,
        tx_builder: TransactionBuilder,
    ):
        self.keystore = keystore
        self.guard = guard
        self.signer = signer
        self.tx_builder = tx_builder

    # ======================
    # Accounts
    # ======================

    async def account(self, params: AccountParams) -> AccountResult:
        """Return the stark public key for a path, deriving it if needed."""
        path = params.path
        if not path:
            owner = params.ethereum_address or self.keystore.get_ethereum_address()
            try:
                path = get_account_path(params.layer, params.application, owner, params.index)
            except ValueError as e:
                raise InvalidParamsError(str(e)) from e

        stark_public_key = await self.keystore.get_stark_public_key(path)
        return AccountResult(stark_public_key=stark_public_key)

    async def register(self, params: RegisterParams) -> TransactionResult:
        signature = params.operator_signature
        if signature.startswith("0x"):
            signature = signature[2:]
        try:
            signature_bytes = bytes.fromhex(signature)
        except ValueError:
            raise InvalidParamsError("operatorSignature must be hex encoded")

        return await self._build(
            params.contract_address,
            "register",
            [params.stark_public_key, signature_bytes],
        )

    # ======================
    # Deposits
    # ======================

    async def deposit(self, params: DepositParams) -> TransactionResult:
        await self.guard.assert_identity(params.stark_public_key)
        return await self._build(
            params.contract_address,
            "deposit",
            [hash_token_id(params.token), params.vault_id, params.quantized_amount],
        )

    async def deposit_cancel(self, params: DepositCancelParams) -> TransactionResult:
        await self.guard.assert_identity(params.stark_public_key)
        return await self._build(
            params.contract_address,
            "depositCancel",
            [hash_token_id(params.token), params.vault_id],
        )

    async def deposit_reclaim(self, params: DepositReclaimParams) -> TransactionResult:
        await self.guard.assert_identity(params.stark_public_key)
        return await self._build(
            params.contract_address,
            "depositReclaim",
            [hash_token_id(params.token), params.vault_id],
        )

    # ======================
    # Off-chain signatures
    # ======================

    async def transfer(self, params: TransferParams) -> SignatureResult:
        key_pair = await self.guard.assert_identity(params.sender.stark_public_key)
        msg_hash = get_transfer_msg(
            params.quantized_amount,
            params.nonce,
            params.sender.vault_id,
            params.token,
            params.receiver.vault_id,
            params.receiver.stark_public_key,
            params.expiration_timestamp,
        )
        return await self._sign(key_pair, msg_hash)

    async def create_order(self, params: CreateOrderParams) -> SignatureResult:
        key_pair = await self.guard.assert_identity(params.stark_public_key)
        msg_hash = get_limit_order_msg(
            params.sell.vault_id,
            params.buy.vault_id,
            params.sell.quantized_amount,
            params.buy.quantized_amount,
            params.sell.token,
            params.buy.token,
            params.nonce,
            params.expiration_timestamp,
        )
        return await self._sign(key_pair, msg_hash)

    # ======================
    # Withdrawals and escape hatch
    # ======================

    async def withdrawal(self, params: WithdrawalParams) -> TransactionResult:
        await self.guard.assert_identity(params.stark_public_key)
        return await self._build(
            params.contract_address,
            "withdraw",
            [hash_token_id(params.token)],
        )

    async def full_withdrawal(self, params: FullWithdrawalParams) -> TransactionResult:
        await self.guard.assert_identity(params.stark_public_key)
        return await self._build(
            params.contract_address,
            "fullWithdrawalRequest",
            [params.vault_id],
        )

    async def freeze(self, params: FreezeParams) -> TransactionResult:
        await self.guard.assert_identity(params.stark_public_key)
        return await self._build(
            params.contract_address,
            "freezeRequest",
            [params.vault_id],
        )

    async def verify_escape(self, params: VerifyEscapeParams) -> TransactionResult:
        await self.guard.assert_identity(params.stark_public_key)
        return await self._build(
            params.contract_address,
            "verifyEscape",
            [list(params.proof)],
        )

    async def escape(self, params: EscapeParams) -> TransactionResult:
        await self.guard.assert_identity(params.stark_public_key)
        return await self._build(
            params.contract_address,
            "escape",
            [
                params.stark_public_key,
                params.vault_id,
                hash_token_id(params.token),
                params.quantized_amount,
            ],
        )

    # ======================
    # Collaborator calls
    # ======================

    async def _build(self, contract_address: str, method: str, args: Sequence[Any]) -> TransactionResult:
        try:
            transaction = await self.tx_builder.build_transaction(contract_address, method, args)
        except Exception as e:
            raise CollaboratorError("transaction builder", str(e)) from e

        logger.info(f"Prepared unsigned {method} for {transaction.to}")
        return TransactionResult(transaction=transaction)

    async def _sign(self, key_pair: StarkKeyPair, msg_hash: int) -> SignatureResult:
        try:
            signature = await self.signer.sign(key_pair, msg_hash)
        except Exception as e:
            raise CollaboratorError("signer", str(e)) from e

        logger.info(f"Signed message for {key_pair.stark_public_key}")
        return SignatureResult(stark_signature=format_signature(signature.r, signature.s))
