"""Pool state and accounting: reserves, provider shares and swaps."""

from dex.pool.ledger import LiquidityChange, LiquidityLedger
from dex.pool.reserves import PoolStatus, ReservePool, ReserveSnapshot
from dex.pool.swap import SwapDirection, SwapEngine, SwapResult

__all__ = [
    # Reserves
    "PoolStatus",
    "ReservePool",
    "ReserveSnapshot",
    # Liquidity
    "LiquidityChange",
    "LiquidityLedger",
    # Swaps
    "SwapDirection",
    "SwapEngine",
    "SwapResult",
]
