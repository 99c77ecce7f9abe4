"""Pool configuration for the exchange."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fractions import Fraction

from dex.constants import FEE_DENOMINATOR, FEE_NUMERATOR, PRICE_SCALE


@dataclass(frozen=True)
class PoolConfig:
    """Centralized configuration for swap pricing.

    The fee multiplier is fixed when the pool is created; there is no
    runtime governance of the rate.

    Attributes:
        fee_numerator: Priced fraction of the swap input, numerator (default: 997)
        fee_denominator: Priced fraction of the swap input, denominator (default: 1000)
        price_scale: Fixed-point scale of get_price() (default: 1e18)
    """

    fee_numerator: int = FEE_NUMERATOR
    fee_denominator: int = FEE_DENOMINATOR
    price_scale: int = PRICE_SCALE

    def __post_init__(self) -> None:
        if self.fee_denominator <= 0:
            raise ValueError(f"fee_denominator must be positive: {self.fee_denominator}")
        if not (0 < self.fee_numerator < self.fee_denominator):
            raise ValueError(
                f"fee multiplier must be in (0, 1): {self.fee_numerator}/{self.fee_denominator}"
            )
        if self.price_scale <= 0:
            raise ValueError(f"price_scale must be positive: {self.price_scale}")

    @property
    def fee_rate(self) -> Fraction:
        """Fraction of each swap input retained by the pool."""
        return 1 - Fraction(self.fee_numerator, self.fee_denominator)

    @classmethod
    def from_env(cls) -> PoolConfig:
        """Build a config from DEX_FEE_NUMERATOR / DEX_FEE_DENOMINATOR.

        Unset variables fall back to the defaults.

        Raises:
            ValueError: If a variable is not an integer or the fee is out of range
        """
        return cls(
            fee_numerator=int(os.environ.get("DEX_FEE_NUMERATOR", FEE_NUMERATOR)),
            fee_denominator=int(os.environ.get("DEX_FEE_DENOMINATOR", FEE_DENOMINATOR)),
        )


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()
