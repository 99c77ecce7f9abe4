"""API endpoints for the exchange.

Endpoints are plain functions, so FastAPI runs them on its worker thread
pool; the Exchange lock serializes them against the pool.
"""

from enum import Enum
from typing import Any

import structlog
from fastapi import APIRouter, Depends, Query

from dex.exchange import Exchange, get_default_exchange
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
from dex.models.events import PoolEvent
from dex.models.types import normalize_address
from dex.pool.swap import SwapDirection

logger = structlog.get_logger()

router = APIRouter()

# Rejections rendered by the exception handlers in dex.api.main
OPERATION_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid amount or arithmetic overflow"},
    402: {"model": ErrorResponse, "description": "Asset transfer declined"},
    409: {"model": ErrorResponse, "description": "Empty pool or insufficient shares"},
}


class DirectionParam(str, Enum):
    """Swap direction as it appears in URLs."""

    A_TO_B = "a-to-b"
    B_TO_A = "b-to-a"

    def to_direction(self) -> SwapDirection:
        return SwapDirection.A_TO_B if self is DirectionParam.A_TO_B else SwapDirection.B_TO_A


class AssetParam(str, Enum):
    A = "A"
    B = "B"


def get_exchange() -> Exchange:
    """Dependency provider for the exchange instance.

    Override this in tests to inject a fresh exchange:
        app.dependency_overrides[get_exchange] = lambda: exchange
    """
    return get_default_exchange()


@router.get("/pool")
def pool_state(exchange: Exchange = Depends(get_exchange)) -> PoolState:
    """Reserves, total liquidity, spot price and fee of the pool."""
    reserve_a, reserve_b = exchange.get_reserves()
    return PoolState(
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        total_liquidity=exchange.total_liquidity(),
        price=exchange.get_price(),
        price_scale=exchange.config.price_scale,
        fee_numerator=exchange.config.fee_numerator,
        fee_denominator=exchange.config.fee_denominator,
        status=exchange.status,
    )


@router.get("/liquidity/{account}")
def liquidity(account: str, exchange: Exchange = Depends(get_exchange)) -> LiquidityResponse:
    account = normalize_address(account)
    return LiquidityResponse(account=account, shares=exchange.liquidity(account))


@router.post("/liquidity/add", responses=OPERATION_ERRORS)
def add_liquidity(
    request: AddLiquidityRequest,
    exchange: Exchange = Depends(get_exchange),
) -> AddLiquidityResponse:
    """Deposit both assets; the pool must already be approved for both."""
    shares = exchange.add_liquidity(
        request.amount_a, request.amount_b, normalize_address(request.account)
    )
    return AddLiquidityResponse(shares_minted=shares)


@router.post("/liquidity/remove", responses=OPERATION_ERRORS)
def remove_liquidity(
    request: RemoveLiquidityRequest,
    exchange: Exchange = Depends(get_exchange),
) -> RemoveLiquidityResponse:
    amount_a, amount_b = exchange.remove_liquidity(
        request.shares, normalize_address(request.account)
    )
    return RemoveLiquidityResponse(amount_a=amount_a, amount_b=amount_b)


@router.post("/swap/{direction}", responses=OPERATION_ERRORS)
def swap(
    direction: DirectionParam,
    request: SwapRequest,
    exchange: Exchange = Depends(get_exchange),
) -> SwapResponse:
    """Sell amountIn of the input asset for as much output as the curve gives."""
    amount_out = exchange.swap(
        request.amount_in, direction.to_direction(), normalize_address(request.account)
    )
    return SwapResponse(amount_out=amount_out)


@router.get("/quote/{direction}", responses=OPERATION_ERRORS)
def quote(
    direction: DirectionParam,
    amount_in: int = Query(alias="amountIn", ge=0),
    exchange: Exchange = Depends(get_exchange),
) -> QuoteResponse:
    """Output a swap would produce right now, without executing it."""
    amount_out = exchange.get_amount_out(amount_in, direction.to_direction())
    return QuoteResponse(amount_in=amount_in, amount_out=amount_out)


@router.get("/events")
def events(exchange: Exchange = Depends(get_exchange)) -> list[PoolEvent]:
    """All pool events, oldest first."""
    return exchange.events.all()


@router.get("/assets/{asset}/{account}")
def balance(
    asset: AssetParam,
    account: str,
    exchange: Exchange = Depends(get_exchange),
) -> BalanceResponse:
    """Balance of account and the pool's allowance on it."""
    account = normalize_address(account)
    ledger = exchange.ledger_for(asset.value)
    allowance = getattr(ledger, "allowance", None)
    return BalanceResponse(
        account=account,
        asset=asset.value,
        balance=ledger.balance_of(account),
        allowance=allowance(account, exchange.pool_account) if allowance else 0,
    )


@router.post("/assets/{asset}/mint", responses={400: {"model": ErrorResponse}})
def mint(
    asset: AssetParam,
    request: MintRequest,
    exchange: Exchange = Depends(get_exchange),
) -> BalanceResponse:
    """Credit new units of an in-memory asset to an account."""
    account = normalize_address(request.account)
    exchange.mint(asset.value, account, request.amount)
    logger.info("asset_faucet", asset=asset.value, account=account, amount=request.amount)
    return balance(asset, account, exchange)


@router.post("/assets/{asset}/approve")
def approve(
    asset: AssetParam,
    request: ApproveRequest,
    exchange: Exchange = Depends(get_exchange),
) -> BalanceResponse:
    """Allow the pool to pull up to amount of the account's asset."""
    account = normalize_address(request.account)
    exchange.approve(asset.value, account, request.amount)
    return balance(asset, account, exchange)
