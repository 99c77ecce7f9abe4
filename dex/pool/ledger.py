"""Liquidity provider share accounting.

Shares are minted against the geometric mean of the first deposit
(isqrt(amount_a * amount_b)) and pro rata against current reserves
afterwards. Redemption pays out the floor of the provider's fraction of
each reserve; rounding dust stays in the pool for remaining providers.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from dex.errors import InsufficientShares, InvalidAmount, InvariantViolation
from dex.pool.amounts import require_amount
from dex.pool.reserves import ReservePool
from dex.safe_int import S, mul_div

logger = structlog.get_logger()


@dataclass(frozen=True)
class LiquidityChange:
    """Result of a deposit or redemption against the pool."""

    provider: str
    amount_a: int
    amount_b: int
    shares: int


class LiquidityLedger:
    """Per-provider share balances of one pool.

    The table is sparse: providers whose balance returns to zero are
    dropped, and absent providers read as zero.
    """

    def __init__(self, pool: ReservePool) -> None:
        self._pool = pool
        self._shares: dict[str, int] = {}

    @property
    def pool(self) -> ReservePool:
        return self._pool

    def liquidity(self, provider: str) -> int:
        """Share balance of provider. Returns 0 if not found."""
        return self._shares.get(provider, 0)

    def total_liquidity(self) -> int:
        return self._pool.total_shares

    def get_reserves(self) -> tuple[int, int]:
        return self._pool.reserves()

    def providers(self) -> dict[str, int]:
        """Return all non-zero share balances."""
        return dict(self._shares)

    def set_liquidity(self, provider: str, shares: int) -> None:
        """Overwrite a provider balance, used to roll back a failed operation."""
        if shares < 0:
            raise ValueError(f"Share balance cannot be negative: {shares}")
        if shares == 0:
            self._shares.pop(provider, None)
        else:
            self._shares[provider] = shares

    def quote_mint(self, amount_a: int, amount_b: int) -> int:
        """Shares a deposit of (amount_a, amount_b) would mint right now.

        Against an active pool a deposit worth less than one share quotes 0;
        it is still accepted and its amounts go to the existing providers.

        Raises:
            InvalidAmount: If either amount is zero
            Uint256Overflow: If an intermediate product exceeds uint256
        """
        require_amount(amount_a, "amount_a")
        require_amount(amount_b, "amount_b")
        if amount_a == 0 or amount_b == 0:
            raise InvalidAmount("Zero amount")

        pool = self._pool
        if pool.total_shares == 0:
            return (S(amount_a) * S(amount_b)).isqrt().value
        by_a = S(mul_div(amount_a, pool.total_shares, pool.reserve_a))
        return by_a.min(mul_div(amount_b, pool.total_shares, pool.reserve_b)).value

    def add_liquidity(self, amount_a: int, amount_b: int, provider: str) -> LiquidityChange:
        """Deposit both assets and mint shares to provider.

        The full amounts are absorbed into the reserves even when their
        ratio differs from the pool's; shares are minted by the scarcer side.

        Returns:
            LiquidityChange with the deposited amounts and shares minted
        """
        minted = self.quote_mint(amount_a, amount_b)
        pool = self._pool

        # Checked sums before any field is written
        new_reserve_a = (S(pool.reserve_a) + amount_a).value
        new_reserve_b = (S(pool.reserve_b) + amount_b).value
        new_total = (S(pool.total_shares) + minted).value

        pool.reserve_a = new_reserve_a
        pool.reserve_b = new_reserve_b
        pool.total_shares = new_total
        self.set_liquidity(provider, self.liquidity(provider) + minted)

        logger.debug(
            "shares_minted",
            provider=provider,
            amount_a=amount_a,
            amount_b=amount_b,
            shares=minted,
            total_shares=new_total,
        )
        return LiquidityChange(provider, amount_a, amount_b, minted)

    def quote_burn(self, share_amount: int, provider: str) -> tuple[int, int]:
        """Amounts of A and B that burning share_amount would pay out.

        Raises:
            InvalidAmount: If share_amount is zero
            InsufficientShares: If share_amount exceeds the provider's balance
        """
        require_amount(share_amount, "share_amount")
        if share_amount == 0:
            raise InvalidAmount("Zero amount")
        balance = self.liquidity(provider)
        if share_amount > balance:
            raise InsufficientShares(
                f"Not enough LP: {provider} holds {balance}, requested {share_amount}"
            )

        pool = self._pool
        amount_a = mul_div(pool.reserve_a, share_amount, pool.total_shares)
        amount_b = mul_div(pool.reserve_b, share_amount, pool.total_shares)
        return amount_a, amount_b

    def remove_liquidity(self, share_amount: int, provider: str) -> LiquidityChange:
        """Burn provider shares and pay out the proportional reserves.

        Returns:
            LiquidityChange with the amounts paid out and shares burned
        """
        amount_a, amount_b = self.quote_burn(share_amount, provider)
        pool = self._pool

        new_reserve_a = (S(pool.reserve_a) - amount_a).value
        new_reserve_b = (S(pool.reserve_b) - amount_b).value
        new_total = (S(pool.total_shares) - share_amount).value

        pool.reserve_a = new_reserve_a
        pool.reserve_b = new_reserve_b
        pool.total_shares = new_total
        self.set_liquidity(provider, self.liquidity(provider) - share_amount)

        logger.debug(
            "shares_burned",
            provider=provider,
            amount_a=amount_a,
            amount_b=amount_b,
            shares=share_amount,
            total_shares=new_total,
        )
        return LiquidityChange(provider, amount_a, amount_b, share_amount)

    def check_invariants(self) -> None:
        """Verify pool invariants and that balances sum to total_shares."""
        self._pool.check_invariants()
        held = sum(self._shares.values())
        if held != self._pool.total_shares:
            raise InvariantViolation(
                f"Share balances sum to {held}, total_shares is {self._pool.total_shares}"
            )
