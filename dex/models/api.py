"""Pydantic models for the exchange HTTP interface.

Amounts travel as uint256 decimal strings; field names are camelCase on
the wire and snake_case in Python.
"""

from pydantic import BaseModel, Field

from dex.models.types import Address, Uint256
from dex.pool.reserves import PoolStatus


class AddLiquidityRequest(BaseModel):
    """Deposit both assets into the pool."""

    account: Address = Field(description="Depositing provider.")
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    """Burn shares for a proportional cut of both reserves."""

    account: Address = Field(description="Redeeming provider.")
    shares: Uint256

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    """Sell an exact amount of one asset."""

    account: Address = Field(description="Trader.")
    amount_in: Uint256 = Field(alias="amountIn")

    model_config = {"populate_by_name": True}


class MintRequest(BaseModel):
    """Credit new units of an asset to an account."""

    account: Address
    amount: Uint256


class ApproveRequest(BaseModel):
    """Allow the pool to pull up to amount of an account's asset."""

    account: Address
    amount: Uint256


class PoolState(BaseModel):
    """Snapshot of the pool's public state."""

    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")
    total_liquidity: Uint256 = Field(alias="totalLiquidity")
    price: Uint256 = Field(description="Spot price of A in B, scaled by priceScale.")
    price_scale: Uint256 = Field(alias="priceScale")
    fee_numerator: int = Field(alias="feeNumerator")
    fee_denominator: int = Field(alias="feeDenominator")
    status: PoolStatus

    model_config = {"populate_by_name": True}


class AddLiquidityResponse(BaseModel):
    shares_minted: Uint256 = Field(alias="sharesMinted")

    model_config = {"populate_by_name": True}


class RemoveLiquidityResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class LiquidityResponse(BaseModel):
    account: str
    shares: Uint256


class BalanceResponse(BaseModel):
    account: str
    asset: str
    balance: Uint256
    allowance: Uint256


class ErrorResponse(BaseModel):
    """Body returned for a rejected operation."""

    error: str = Field(description="Exception class name, e.g. InsufficientShares.")
    detail: str
