"""Reserve state of a two-asset pool."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dex.errors import InvariantViolation


class PoolStatus(str, Enum):
    """Macro-state of a pool."""

    EMPTY = "empty"  # No shares outstanding, both reserves zero
    ACTIVE = "active"  # Shares outstanding, both reserves positive


@dataclass(frozen=True)
class ReserveSnapshot:
    """Point-in-time copy of a ReservePool, used for rollback."""

    reserve_a: int
    reserve_b: int
    total_shares: int


@dataclass
class ReservePool:
    """The pool's held balances of asset A and B plus total share supply.

    ReservePool is the shared state owner: LiquidityLedger and SwapEngine
    mutate its fields directly, everyone else goes through the read
    accessors.
    """

    reserve_a: int = 0
    reserve_b: int = 0
    total_shares: int = 0

    def reserves(self) -> tuple[int, int]:
        """Get reserves as (reserve_a, reserve_b)."""
        return self.reserve_a, self.reserve_b

    @property
    def status(self) -> PoolStatus:
        return PoolStatus.ACTIVE if self.total_shares > 0 else PoolStatus.EMPTY

    @property
    def k(self) -> int:
        """Constant-product value reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    def snapshot(self) -> ReserveSnapshot:
        return ReserveSnapshot(self.reserve_a, self.reserve_b, self.total_shares)

    def restore(self, snapshot: ReserveSnapshot) -> None:
        self.reserve_a = snapshot.reserve_a
        self.reserve_b = snapshot.reserve_b
        self.total_shares = snapshot.total_shares

    def check_invariants(self) -> None:
        """Verify the reserve/share relationship of the two macro-states.

        Raises:
            InvariantViolation: If a field is negative, or shares and
                reserves disagree on whether the pool is empty
        """
        if self.reserve_a < 0 or self.reserve_b < 0 or self.total_shares < 0:
            raise InvariantViolation(f"Negative pool field: {self!r}")
        if self.total_shares == 0:
            if self.reserve_a != 0 or self.reserve_b != 0:
                raise InvariantViolation(f"Reserves without shares: {self!r}")
        elif self.reserve_a == 0 or self.reserve_b == 0:
            raise InvariantViolation(f"Shares without reserves: {self!r}")
