"""Constant-product swap engine.

The pool prices swaps with the constant product formula x * y = k.
A fixed fraction of every input is excluded from pricing but still
deposited, so k grows with each swap and fees accrue to share holders.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from dex.config import DEFAULT_POOL_CONFIG, PoolConfig
from dex.errors import EmptyPool, ZeroInput
from dex.pool.amounts import require_amount
from dex.pool.reserves import ReservePool
from dex.safe_int import S, mul_div

logger = structlog.get_logger()


class SwapDirection(str, Enum):
    """Which asset is sold into the pool."""

    A_TO_B = "A_TO_B"
    B_TO_A = "B_TO_A"


@dataclass(frozen=True)
class SwapResult:
    """Result of executing a swap against the pool."""

    trader: str
    direction: SwapDirection
    amount_in: int
    amount_out: int


class SwapEngine:
    """Constant product quoting and execution against a ReservePool.

    Formula: amount_out = reserve_out * in_with_fee / (reserve_in + in_with_fee)
    where in_with_fee = amount_in * fee_numerator / fee_denominator.
    """

    def __init__(self, pool: ReservePool, config: PoolConfig = DEFAULT_POOL_CONFIG) -> None:
        self._pool = pool
        self._config = config

    @property
    def config(self) -> PoolConfig:
        return self._config

    def get_reserves(self, direction: SwapDirection) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if direction == SwapDirection.A_TO_B:
            return self._pool.reserve_a, self._pool.reserve_b
        return self._pool.reserve_b, self._pool.reserve_a

    def get_amount_out(self, amount_in: int, direction: SwapDirection) -> int:
        """Calculate the output of selling amount_in in the given direction.

        Args:
            amount_in: Input asset amount
            direction: A_TO_B sells asset A, B_TO_A sells asset B

        Returns:
            Output asset amount, strictly below the output reserve; 0 when the
            fee-adjusted input is too small to buy a single unit

        Raises:
            ZeroInput: If amount_in is zero
            EmptyPool: If either reserve is zero
            Uint256Overflow: If an intermediate product exceeds uint256
        """
        require_amount(amount_in, "amount_in")
        if amount_in == 0:
            raise ZeroInput("Zero input")
        reserve_in, reserve_out = self.get_reserves(direction)
        if reserve_in == 0 or reserve_out == 0:
            raise EmptyPool("Empty pool")

        in_with_fee = mul_div(amount_in, self._config.fee_numerator, self._config.fee_denominator)
        denominator = S(reserve_in) + in_with_fee
        return mul_div(reserve_out, in_with_fee, denominator)

    def swap(self, amount_in: int, direction: SwapDirection, trader: str) -> SwapResult:
        """Execute a swap, moving amount_in into the pool and amount_out out of it.

        The whole input, fee included, is added to the input reserve.
        """
        amount_out = self.get_amount_out(amount_in, direction)
        reserve_in, reserve_out = self.get_reserves(direction)

        new_reserve_in = (S(reserve_in) + amount_in).value
        new_reserve_out = (S(reserve_out) - amount_out).value

        if direction == SwapDirection.A_TO_B:
            self._pool.reserve_a, self._pool.reserve_b = new_reserve_in, new_reserve_out
        else:
            self._pool.reserve_b, self._pool.reserve_a = new_reserve_in, new_reserve_out

        logger.debug(
            "swap_applied",
            trader=trader,
            direction=direction.value,
            amount_in=amount_in,
            amount_out=amount_out,
            reserve_a=self._pool.reserve_a,
            reserve_b=self._pool.reserve_b,
        )
        return SwapResult(trader, direction, amount_in, amount_out)

    def swap_a_for_b(self, amount_in: int, trader: str) -> SwapResult:
        return self.swap(amount_in, SwapDirection.A_TO_B, trader)

    def swap_b_for_a(self, amount_in: int, trader: str) -> SwapResult:
        return self.swap(amount_in, SwapDirection.B_TO_A, trader)

    def get_price(self) -> int:
        """Spot price of asset A in asset B, scaled by price_scale.

        Returns 0 while reserve_a is zero.
        """
        if self._pool.reserve_a == 0:
            return 0
        return mul_div(self._pool.reserve_b, self._config.price_scale, self._pool.reserve_a)
