"""Token descriptors.

A token is a kind tag plus kind-specific data:
    {"type": "ERC20", "data": {"quantum": "1", "tokenAddress": "0x..."}}
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from starkex_controller.contracts.types import WIRE_CONFIG, Address, IntLike


class ETHTokenData(BaseModel):
    model_config = WIRE_CONFIG

    quantum: IntLike = Field(..., description="Quantization unit")


class ERC20TokenData(BaseModel):
    model_config = WIRE_CONFIG

    quantum: IntLike = Field(..., description="Quantization unit")
    token_address: Address = Field(..., description="ERC20 contract address")


class ERC721TokenData(BaseModel):
    model_config = WIRE_CONFIG

    token_id: IntLike = Field(..., description="NFT token id")
    token_address: Address = Field(..., description="ERC721 contract address")


class ETHToken(BaseModel):
    type: Literal["ETH"] = "ETH"
    data: ETHTokenData


class ERC20Token(BaseModel):
    type: Literal["ERC20"] = "ERC20"
    data: ERC20TokenData


class MintableERC20Token(BaseModel):
    type: Literal["MINTABLE_ERC20"] = "MINTABLE_ERC20"
    data: ERC20TokenData


class ERC721Token(BaseModel):
    type: Literal["ERC721"] = "ERC721"
    data: ERC721TokenData


Token = Annotated[
    Union[ETHToken, ERC20Token, MintableERC20Token, ERC721Token],
    Field(discriminator="type"),
]
