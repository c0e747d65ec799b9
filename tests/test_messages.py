"""Tests for token id hashing and message construction."""

import pytest
from eth_abi import encode
from eth_utils import keccak
from pydantic import TypeAdapter
from starknet_py.hash.utils import pedersen_hash

from conftest import ERC20_ADDRESS, erc20_token, erc721_token, eth_token
from starkex_controller.contracts.tokens import Token
from starkex_controller.errors import InvalidParamsError
from starkex_controller.messages import (
    ASSET_SELECTORS,
    INSTRUCTION_LIMIT_ORDER,
    MASK_250,
    _pack_message,
    get_asset_type,
    get_limit_order_msg,
    get_transfer_msg,
    hash_token_id,
)

TOKEN = TypeAdapter(Token)

RECEIVER_KEY = 0x3E7A7EF5E0B47A8D9A3D7B6D3B5D1A1D1C0E9F8A7B6C5D4E3F2A1B0C9D8E7F6


def token(data: dict):
    return TOKEN.validate_python(data)


class TestTokenId:
    """Tests for hashing token descriptors into token ids."""

    def test_eth_asset_type(self):
        """Test the ETH asset type against its definition."""
        expected = int.from_bytes(
            keccak(ASSET_SELECTORS["ETH"] + encode(["uint256"], [1])), "big"
        ) & MASK_250

        assert get_asset_type(token(eth_token("1"))) == expected
        assert hash_token_id(token(eth_token("1"))) == expected

    def test_published_eth_asset_types(self):
        """Test ETH asset types against values published for StarkEx."""
        assert get_asset_type(token(eth_token("1"))) == (
            0x1142460171646987F20C714EDA4B92812B22B811F56F27130937C267E29BD9E
        )
        assert get_asset_type(token(eth_token(str(10**8)))) == (
            0x02705737CD248AC819034B5DE474C8F0368224F72A0FDA9E031499D519992D9E
        )

    def test_known_erc20_and_erc721_ids(self):
        assert hash_token_id(token(erc20_token("1000"))) == (
            0x2B3A7546F971667DBCC94A424964F23CCD3BBF075620A81DC029F361E1B6EC
        )
        assert hash_token_id(token(erc721_token("7"))) == (
            0x34E1A702D5FC8512820C9E155B8018589B3E31F1C2DF19D96C5DA146B8A384E
        )

    def test_erc20_asset_type(self):
        """Test the ERC20 asset type includes the padded token address."""
        expected = int.from_bytes(
            keccak(
                ASSET_SELECTORS["ERC20"]
                + encode(["address"], [ERC20_ADDRESS])
                + encode(["uint256"], [1000])
            ),
            "big",
        ) & MASK_250

        assert hash_token_id(token(erc20_token("1000"))) == expected

    def test_ids_fit_250_bits(self):
        for data in (eth_token(), erc20_token(), erc721_token()):
            assert hash_token_id(token(data)) < 2**250

    def test_semantically_equal_descriptors_hash_equal(self):
        """Test that formatting differences do not change the token id."""
        canonical = hash_token_id(token(erc20_token("1000")))

        assert hash_token_id(token(erc20_token(1000))) == canonical
        assert hash_token_id(token(erc20_token("0x3e8"))) == canonical
        assert hash_token_id(token(erc20_token("1000", ERC20_ADDRESS.lower()))) == canonical

    def test_quantum_changes_id(self):
        assert hash_token_id(token(eth_token("1"))) != hash_token_id(token(eth_token("10")))

    def test_kind_changes_id(self):
        """Test that ERC20 and mintable ERC20 with the same data differ."""
        mintable = {"type": "MINTABLE_ERC20", "data": erc20_token()["data"]}
        assert hash_token_id(token(erc20_token())) != hash_token_id(token(mintable))

    def test_erc721_id_depends_on_token_id(self):
        """Test that each NFT gets its own asset id."""
        first = hash_token_id(token(erc721_token("1")))
        second = hash_token_id(token(erc721_token("2")))

        assert first != second
        assert get_asset_type(token(erc721_token("1"))) == get_asset_type(token(erc721_token("2")))

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            token({"type": "BTC", "data": {"quantum": "1"}})


class TestTransferMessage:
    """Tests for transfer message construction."""

    def build(self, **overrides):
        fields = {
            "quantized_amount": 1000,
            "nonce": 1,
            "sender_vault_id": 34,
            "token": token(eth_token()),
            "receiver_vault_id": 21,
            "receiver_public_key": RECEIVER_KEY,
            "expiration_timestamp": 438953,
        }
        fields.update(overrides)
        return get_transfer_msg(**fields)

    def test_known_message(self):
        assert self.build() == 0x1A056541DB808FFD2F21DC2C3AA5477653B9B7D27D72595BF5AE9F10DCB3F58

    def test_deterministic(self):
        assert self.build() == self.build()

    def test_every_field_matters(self):
        """Test that changing any field changes the message."""
        base = self.build()

        assert self.build(nonce=2) != base
        assert self.build(quantized_amount=1001) != base
        assert self.build(sender_vault_id=35) != base
        assert self.build(receiver_vault_id=22) != base
        assert self.build(receiver_public_key=RECEIVER_KEY + 1) != base
        assert self.build(expiration_timestamp=438954) != base
        assert self.build(token=token(erc20_token())) != base

    def test_nonce_out_of_range(self):
        with pytest.raises(InvalidParamsError):
            self.build(nonce=2**31)

    def test_vault_out_of_range(self):
        with pytest.raises(InvalidParamsError):
            self.build(sender_vault_id=2**31)

    def test_amount_out_of_range(self):
        with pytest.raises(InvalidParamsError):
            self.build(quantized_amount=2**63)

    def test_expiration_out_of_range(self):
        with pytest.raises(InvalidParamsError):
            self.build(expiration_timestamp=2**22)


class TestLimitOrderMessage:
    """Tests for limit order message construction."""

    def build(self, **overrides):
        fields = {
            "vault_sell": 21,
            "vault_buy": 27,
            "amount_sell": 2154686749748910716,
            "amount_buy": 1470242115489520459,
            "token_sell": token(eth_token()),
            "token_buy": token(erc20_token()),
            "nonce": 0,
            "expiration_timestamp": 438953,
        }
        fields.update(overrides)
        return get_limit_order_msg(**fields)

    def test_known_message(self):
        assert self.build() == 0x7676537295AC4A2D878A8F18D5D7248383098D56B84F9966FB9ED8DCB8B9A60

    def test_published_order_vector(self):
        """Test packing and hashing against the StarkEx limit order test vector."""
        packed = _pack_message(
            INSTRUCTION_LIMIT_ORDER, 21, 27, 2154686749748910716, 1470242115489520459, 0, 438953
        )
        msg = pedersen_hash(
            pedersen_hash(
                0x5FA3383597691EA9D827A79E1A4F0F7989C35CED18CA9619DE8AB97E661020,
                0x774961C824A3B0FB3D2965F01471C9C7734BF8DBDE659E0C08DCA2EF18D56A,
            ),
            packed,
        )

        assert msg == 0x397E76D1667C4454BFB83514E120583AF836F8E32A516765497823EABE16A3F

    def test_deterministic(self):
        assert self.build() == self.build()

    def test_swapping_sides_changes_message(self):
        """Test that sell and buy sides are not interchangeable."""
        swapped = self.build(
            vault_sell=27,
            vault_buy=21,
            amount_sell=1470242115489520459,
            amount_buy=2154686749748910716,
            token_sell=token(erc20_token()),
            token_buy=token(eth_token()),
        )
        assert swapped != self.build()

    def test_differs_from_transfer(self):
        """Test that instruction types keep orders and transfers apart."""
        eth = token(eth_token())
        order = get_limit_order_msg(1, 2, 3, 0, eth, eth, 4, 5)
        transfer = get_transfer_msg(3, 4, 1, eth, 2, hash_token_id(eth), 5)

        assert order != transfer

    def test_amount_out_of_range(self):
        with pytest.raises(InvalidParamsError):
            self.build(amount_buy=2**63)
