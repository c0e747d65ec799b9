"""Pytest configuration and fixtures."""

import os

import pytest
import pytest_asyncio

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"

from starkex_controller.controller import StarkwareController
from starkex_controller.hdwallet.paths import get_account_path
from starkex_controller.keystore import AccountKeyStore
from starkex_controller.signing.local import LocalStarkSigner
from starkex_controller.storage.memory import MemoryStore

# BIP39 test vector; its first Ethereum address is well known
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)
TEST_ETH_ADDRESS = "0x9858EfFD232B4033E47d90003D41EC34EcaEda94"

EXCHANGE_ADDRESS = "0x5fdcca53617f4d2b9134b29090c87d01058e27e9"
ERC20_ADDRESS = "0xdAC17F958D2ee523a2206206994597C13D831ec7"


# Known derivation results for TEST_MNEMONIC under starkex/starkexdvf
ACCOUNT_0_PATH = "m/2645'/579218131'/1393043894'/1823398548'/2055460969'/0"
ACCOUNT_0_PRIVATE_KEY = 0x5A91D32D7F796BAAFB7D6020770948D3B20F36F69E28BE6BFA9472153BAA8AB
ACCOUNT_0_STARK_KEY = "0x03e1484cf46dd48a28eab9e57ebe87bed71100c4adf763f899a4a1050ecb2651"
ACCOUNT_1_STARK_KEY = "0x05e20549345310ee414eb3bf7dd23b24c69aa5e72a8515481cbbe8f0496be673"


def account_path(index: int = 0) -> str:
    return get_account_path("starkex", "starkexdvf", TEST_ETH_ADDRESS, index)


class CountingStore(MemoryStore):
    """MemoryStore that records every call."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.get_calls = 0
        self.set_calls = 0
        self.remove_calls = 0

    async def get(self, key):
        self.get_calls += 1
        return await super().get(key)

    async def set(self, key, value):
        self.set_calls += 1
        await super().set(key, value)

    async def remove(self, key):
        self.remove_calls += 1
        await super().remove(key)


@pytest.fixture
def mnemonic() -> str:
    return TEST_MNEMONIC


@pytest.fixture
def signer() -> LocalStarkSigner:
    return LocalStarkSigner()


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def keystore(store, signer, mnemonic) -> AccountKeyStore:
    return AccountKeyStore(store, signer, mnemonic)


@pytest.fixture
def controller(store, signer, mnemonic) -> StarkwareController:
    return StarkwareController(mnemonic, store, signer=signer, chain_id=5)


@pytest_asyncio.fixture
async def active_key(controller) -> str:
    """Stark public key of the account at index 0, made active."""
    response = await controller.resolve({
        "id": 0,
        "method": "stark_account",
        "params": {"layer": "starkex", "application": "starkexdvf", "index": "0"},
    })
    return response["result"]["starkPublicKey"]


def eth_token(quantum="1"):
    return {"type": "ETH", "data": {"quantum": quantum}}


def erc20_token(quantum="1000", address=ERC20_ADDRESS):
    return {"type": "ERC20", "data": {"quantum": quantum, "tokenAddress": address}}


def erc721_token(token_id="7", address=ERC20_ADDRESS):
    return {"type": "ERC721", "data": {"tokenId": token_id, "tokenAddress": address}}
