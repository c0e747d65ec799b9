"""Component tests: locks, formatting, configuration and transaction building."""

import asyncio

import pytest
from pydantic import TypeAdapter

from conftest import ERC20_ADDRESS, EXCHANGE_ADDRESS, TEST_MNEMONIC, erc20_token, erc721_token, eth_token
from starkex_controller.config import Settings
from starkex_controller.contracts.rpc import RpcError, RpcResponse
from starkex_controller.contracts.tokens import Token
from starkex_controller.controller import create_controller
from starkex_controller.exchange.builder import AbiTransactionBuilder, TransactionBuildError
from starkex_controller.formatting import (
    format_signature,
    format_token_amount,
    format_token_amount_label,
    format_token_label,
)
from starkex_controller.utils.locks import LockTimeoutError, StoreLock

TOKEN = TypeAdapter(Token)


class TestStoreLock:
    """Tests for the key store lock."""

    @pytest.mark.asyncio
    async def test_hold_releases(self):
        lock = StoreLock("test")

        async with lock.hold("test"):
            assert lock.locked()

        assert not lock.locked()

    @pytest.mark.asyncio
    async def test_releases_on_error(self):
        """Test that the lock is released when the block raises."""
        lock = StoreLock("test")

        with pytest.raises(RuntimeError):
            async with lock.hold("test"):
                raise RuntimeError("fail")

        assert not lock.locked()

    @pytest.mark.asyncio
    async def test_serializes_holders(self):
        """Test that two holders never overlap."""
        lock = StoreLock("test", timeout=10.0)
        results = []

        async def task(name, delay):
            async with lock.hold(f"task_{name}"):
                results.append(f"{name}_start")
                await asyncio.sleep(delay)
                results.append(f"{name}_end")

        await asyncio.gather(task("A", 0.05), task("B", 0.05))

        assert results in [
            ["A_start", "A_end", "B_start", "B_end"],
            ["B_start", "B_end", "A_start", "A_end"],
        ]

    @pytest.mark.asyncio
    async def test_waits_without_timeout_by_default(self):
        """Test that the default lock waits out a long holder instead of failing."""
        lock = StoreLock("test")

        async def hold():
            async with lock.hold("holder"):
                await asyncio.sleep(0.2)

        holder = asyncio.create_task(hold())
        await asyncio.sleep(0.05)

        async with lock.hold("waiter"):
            assert holder.done()

        assert lock.timeout is None

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test that waiting past the timeout raises LockTimeoutError."""
        lock = StoreLock("test", timeout=0.1)

        async def hold():
            async with lock.hold("holder"):
                await asyncio.sleep(0.5)

        holder = asyncio.create_task(hold())
        await asyncio.sleep(0.05)

        with pytest.raises(LockTimeoutError):
            async with lock.hold("waiter"):
                pass

        await holder
        assert not lock.locked()


class TestFormatting:
    """Tests for signature and token display helpers."""

    def test_signature_fixed_width(self):
        signature = format_signature(0x1, 0xABC)

        assert signature == "0x" + "0" * 63 + "1" + "0" * 61 + "abc"

    def test_eth_label(self):
        assert format_token_label(TOKEN.validate_python(eth_token())) == [
            {"label": "Asset", "value": "Ether"}
        ]

    def test_erc20_label_with_prefix(self):
        rows = format_token_label(TOKEN.validate_python(erc20_token()), "Sell")

        assert rows == [
            {"label": "Sell Asset", "value": "ERC20 Token"},
            {"label": "Sell Token Address", "value": ERC20_ADDRESS},
        ]

    def test_erc721_label(self):
        rows = format_token_label(TOKEN.validate_python(erc721_token("9")))

        assert rows[1] == {"label": "Token ID", "value": "9"}

    def test_amount_applies_quantum(self):
        assert format_token_amount(5, TOKEN.validate_python(erc20_token("1000"))) == "5000"

    def test_nft_amount_unchanged(self):
        assert format_token_amount(1, TOKEN.validate_python(erc721_token())) == "1"

    def test_amount_label(self):
        rows = format_token_amount_label(3, TOKEN.validate_python(eth_token("10")), "Buy")

        assert rows[-1] == {"label": "Buy Amount", "value": "30"}


class TestSettings:
    """Tests for configuration."""

    def test_safe_dict_redacts_seed(self):
        settings = Settings(wallet_seed_phrase=TEST_MNEMONIC)
        safe = settings.get_safe_dict()

        assert safe["wallet_seed_phrase"] == "***"
        assert TEST_MNEMONIC not in str(safe)
        assert safe["wallet_configured"] is True

    def test_lock_waits_forever_by_default(self):
        settings = Settings(wallet_seed_phrase=TEST_MNEMONIC)
        controller = create_controller(settings)

        assert settings.lock_timeout == 0
        assert controller.keystore._lock.timeout is None

    def test_short_seed_is_not_a_wallet(self):
        assert not Settings(wallet_seed_phrase="too short").has_wallet

    def test_create_controller_requires_wallet(self):
        with pytest.raises(RuntimeError):
            create_controller(Settings(wallet_seed_phrase=None))

    def test_create_controller_uses_settings(self):
        settings = Settings(
            wallet_seed_phrase=TEST_MNEMONIC,
            account_mapping_key="custom",
            chain_id=11155111,
        )
        controller = create_controller(settings)

        assert controller.keystore.mapping_key == "custom"
        assert controller.tx_builder.chain_id == 11155111


class TestTransactionBuilder:
    """Tests for local ABI encoding."""

    @pytest.mark.asyncio
    async def test_unknown_method(self):
        builder = AbiTransactionBuilder()

        with pytest.raises(TransactionBuildError):
            await builder.build_transaction(EXCHANGE_ADDRESS, "transferOwnership", [])

    @pytest.mark.asyncio
    async def test_wrong_arity(self):
        builder = AbiTransactionBuilder()

        with pytest.raises(TransactionBuildError):
            await builder.build_transaction(EXCHANGE_ADDRESS, "deposit", [1, 2])

    @pytest.mark.asyncio
    async def test_uint256_overflow(self):
        builder = AbiTransactionBuilder()

        with pytest.raises(TransactionBuildError):
            await builder.build_transaction(EXCHANGE_ADDRESS, "freezeRequest", [2**256])

    @pytest.mark.asyncio
    async def test_call_data_layout(self):
        """Test that call data is selector plus one 32-byte word per uint."""
        tx = await AbiTransactionBuilder(chain_id=3).build_transaction(
            EXCHANGE_ADDRESS, "fullWithdrawalRequest", [42]
        )

        assert len(tx.data) == 2 + 8 + 64
        assert tx.data.endswith(format(42, "064x"))
        assert tx.chain_id == 3
        assert tx.description == "StarkExchange fullWithdrawalRequest(uint256)"


class TestResponseEnvelope:
    """Tests for the response envelope invariant."""

    def test_result_xor_error(self):
        with pytest.raises(ValueError):
            RpcResponse(id=1)
        with pytest.raises(ValueError):
            RpcResponse(id=1, result={}, error=RpcError(message="x"))

    def test_wire_shape(self):
        assert RpcResponse(id=1, result={"a": 1}).to_wire() == {"id": 1, "result": {"a": 1}}
        assert RpcResponse(id=2, error=RpcError(message="bad")).to_wire() == {
            "id": 2,
            "error": {"message": "bad"},
        }
