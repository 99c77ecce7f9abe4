"""Pydantic models for pool events and the HTTP interface."""

from dex.models.api import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ApproveRequest,
    BalanceResponse,
    ErrorResponse,
    LiquidityResponse,
    MintRequest,
    PoolState,
    QuoteResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
)
from dex.models.events import LiquidityAdded, LiquidityRemoved, PoolEvent, Swap
from dex.models.types import Address, Uint256

__all__ = [
    # Types
    "Address",
    "Uint256",
    # Events
    "LiquidityAdded",
    "LiquidityRemoved",
    "PoolEvent",
    "Swap",
    # API requests
    "AddLiquidityRequest",
    "ApproveRequest",
    "MintRequest",
    "RemoveLiquidityRequest",
    "SwapRequest",
    # API responses
    "AddLiquidityResponse",
    "BalanceResponse",
    "ErrorResponse",
    "LiquidityResponse",
    "PoolState",
    "QuoteResponse",
    "RemoveLiquidityResponse",
    "SwapResponse",
]
