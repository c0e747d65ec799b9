"""Canonical StarkEx messages for signing.

Token ids follow the StarkEx asset encoding:
    asset_info = selector(kind) [+ abi-encoded token address]
    asset_type = keccak256(asset_info + uint256(quantum)) & MASK_250
    asset_id   = asset_type                       (ETH, ERC20, MINTABLE_ERC20)
               = keccak256("NFT:" + asset_type + token_id) & MASK_250   (ERC721)

Transfer and limit-order messages pack their numeric fields into one
integer and hash it with the token pair using the Pedersen hash:
    msg = H(H(token0, token1_or_receiver_key), packed)

All functions here are pure: identical inputs give identical outputs.
"""

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, keccak
from starknet_py.hash.utils import pedersen_hash

from starkex_controller.contracts.tokens import Token
from starkex_controller.errors import InvalidParamsError

MASK_250 = (1 << 250) - 1

INSTRUCTION_LIMIT_ORDER = 0
INSTRUCTION_TRANSFER = 1

# Field widths inside the packed message
VAULT_ID_BITS = 31
AMOUNT_BITS = 63
NONCE_BITS = 31
EXPIRATION_BITS = 22

ASSET_SELECTORS = {
    "ETH": function_signature_to_4byte_selector("ETH()"),
    "ERC20": function_signature_to_4byte_selector("ERC20Token(address)"),
    "ERC721": function_signature_to_4byte_selector("ERC721Token(address,uint256)"),
    "MINTABLE_ERC20": function_signature_to_4byte_selector("MintableERC20Token(address)"),
}


def get_asset_type(token: Token) -> int:
    """Hash a token descriptor into its StarkEx asset type."""
    asset_info = ASSET_SELECTORS[token.type]
    if token.type != "ETH":
        asset_info += encode(["address"], [token.data.token_address])

    # NFTs are not quantized
    quantum = 1 if token.type == "ERC721" else token.data.quantum
    return int.from_bytes(keccak(asset_info + encode(["uint256"], [quantum])), "big") & MASK_250


def hash_token_id(token: Token) -> int:
    """Derive the numeric token id used on-chain and in signed messages."""
    asset_type = get_asset_type(token)
    if token.type != "ERC721":
        return asset_type

    digest = keccak(b"NFT:" + encode(["uint256", "uint256"], [asset_type, token.data.token_id]))
    return int.from_bytes(digest, "big") & MASK_250


def _check_range(name: str, value: int, bits: int) -> int:
    if not 0 <= value < (1 << bits):
        raise InvalidParamsError(f"{name} must be in [0, 2**{bits}), got {value}")
    return value


def _pack_message(
    instruction: int,
    vault_0: int,
    vault_1: int,
    amount_0: int,
    amount_1: int,
    nonce: int,
    expiration_timestamp: int,
) -> int:
    packed = instruction
    packed = (packed << VAULT_ID_BITS) + _check_range("vault id", vault_0, VAULT_ID_BITS)
    packed = (packed << VAULT_ID_BITS) + _check_range("vault id", vault_1, VAULT_ID_BITS)
    packed = (packed << AMOUNT_BITS) + _check_range("amount", amount_0, AMOUNT_BITS)
    packed = (packed << AMOUNT_BITS) + _check_range("amount", amount_1, AMOUNT_BITS)
    packed = (packed << NONCE_BITS) + _check_range("nonce", nonce, NONCE_BITS)
    packed = (packed << EXPIRATION_BITS) + _check_range(
        "expirationTimestamp", expiration_timestamp, EXPIRATION_BITS
    )
    return packed


def get_transfer_msg(
    quantized_amount: int,
    nonce: int,
    sender_vault_id: int,
    token: Token,
    receiver_vault_id: int,
    receiver_public_key: int,
    expiration_timestamp: int,
) -> int:
    """Message hash for a transfer between two vaults.

    Raises:
        InvalidParamsError: If a field does not fit its packed width
    """
    packed = _pack_message(
        INSTRUCTION_TRANSFER,
        sender_vault_id,
        receiver_vault_id,
        quantized_amount,
        0,
        nonce,
        expiration_timestamp,
    )
    return pedersen_hash(pedersen_hash(hash_token_id(token), receiver_public_key), packed)


def get_limit_order_msg(
    vault_sell: int,
    vault_buy: int,
    amount_sell: int,
    amount_buy: int,
    token_sell: Token,
    token_buy: Token,
    nonce: int,
    expiration_timestamp: int,
) -> int:
    """Message hash for a limit order.

    Raises:
        InvalidParamsError: If a field does not fit its packed width
    """
    packed = _pack_message(
        INSTRUCTION_LIMIT_ORDER,
        vault_sell,
        vault_buy,
        amount_sell,
        amount_buy,
        nonce,
        expiration_timestamp,
    )
    return pedersen_hash(pedersen_hash(hash_token_id(token_sell), hash_token_id(token_buy)), packed)
