"""Pydantic models for pool state-change notifications."""

from typing import Annotated, Literal

from pydantic import BaseModel, Discriminator, Field

from dex.models.types import Uint256
from dex.pool.swap import SwapDirection


class LiquidityAdded(BaseModel):
    """A provider deposited both assets and received shares."""

    kind: Literal["LiquidityAdded"] = "LiquidityAdded"
    sequence: int = Field(description="Position of the event in the pool's log.")
    provider: str
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")
    shares_minted: Uint256 = Field(alias="sharesMinted")

    model_config = {"populate_by_name": True, "frozen": True}


class LiquidityRemoved(BaseModel):
    """A provider burned shares and received both assets."""

    kind: Literal["LiquidityRemoved"] = "LiquidityRemoved"
    sequence: int = Field(description="Position of the event in the pool's log.")
    provider: str
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")
    share_amount: Uint256 = Field(alias="shareAmount")

    model_config = {"populate_by_name": True, "frozen": True}


class Swap(BaseModel):
    """A trader sold one asset into the pool for the other."""

    kind: Literal["Swap"] = "Swap"
    sequence: int = Field(description="Position of the event in the pool's log.")
    trader: str
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")
    direction: SwapDirection

    model_config = {"populate_by_name": True, "frozen": True}


PoolEvent = Annotated[LiquidityAdded | LiquidityRemoved | Swap, Discriminator("kind")]
