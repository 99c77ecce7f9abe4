#!/usr/bin/env python3
"""Simulate a series of swaps against a freshly seeded pool.

Seeds a pool with one provider, runs alternating or one-directional swaps
from a trader account, and prints reserves, spot price and k after each
step. At the end the provider redeems everything, showing the fee income.

Usage:
    python scripts/simulate_swaps.py --reserve-a 100 --reserve-b 200 --swaps 5 --amount 10
"""

import argparse
import sys
from pathlib import Path

import structlog

sys.path.insert(0, str(Path(__file__).parent.parent))

from dex.api.main import configure_logging
from dex.config import PoolConfig
from dex.exchange import create_exchange
from dex.pool.swap import SwapDirection

UNIT = 10**18

PROVIDER = "0x" + "aa" * 20
TRADER = "0x" + "bb" * 20

logger = structlog.get_logger()


def fmt(amount: int) -> str:
    """Format a fixed-point amount with 18 decimals."""
    return f"{amount / UNIT:,.6f}"


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Simulate constant-product swaps and LP fee accrual",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--reserve-a", type=int, default=100, help="Initial A (whole units)")
    parser.add_argument("--reserve-b", type=int, default=200, help="Initial B (whole units)")
    parser.add_argument("--swaps", type=int, default=5, help="Number of swaps")
    parser.add_argument("--amount", type=int, default=10, help="Swap input (whole units)")
    parser.add_argument(
        "--alternate",
        action="store_true",
        help="Alternate A->B and B->A swaps instead of always selling A",
    )
    parser.add_argument("--fee-numerator", type=int, default=997)
    parser.add_argument("--fee-denominator", type=int, default=1000)
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        config = PoolConfig(fee_numerator=args.fee_numerator, fee_denominator=args.fee_denominator)
    except ValueError as err:
        print(f"Error: {err}")
        return 1

    exchange = create_exchange(config)
    seed_a, seed_b = args.reserve_a * UNIT, args.reserve_b * UNIT
    swap_amount = args.amount * UNIT
    budget = swap_amount * args.swaps

    for ledger in (exchange.asset_a, exchange.asset_b):
        ledger.mint(PROVIDER, seed_a if ledger is exchange.asset_a else seed_b)
        ledger.approve(PROVIDER, exchange.pool_account, seed_a + seed_b)
        ledger.mint(TRADER, budget)
        ledger.approve(TRADER, exchange.pool_account, budget)

    shares = exchange.add_liquidity(seed_a, seed_b, PROVIDER)

    print("=" * 72)
    print(f"Pool seeded with {fmt(seed_a)} A / {fmt(seed_b)} B, {shares} shares minted")
    print(
        f"Fee multiplier: {config.fee_numerator}/{config.fee_denominator} "
        f"({float(config.fee_rate):.2%} of each input retained)"
    )
    print("=" * 72)
    print(f"{'#':>3} {'dir':>6} {'in':>14} {'out':>14} {'price':>12} {'k growth':>12}")

    k0 = seed_a * seed_b
    for step in range(args.swaps):
        direction = SwapDirection.A_TO_B
        if args.alternate and step % 2 == 1:
            direction = SwapDirection.B_TO_A
        amount_out = exchange.swap(swap_amount, direction, TRADER)
        reserve_a, reserve_b = exchange.get_reserves()
        growth = (reserve_a * reserve_b) / k0 - 1
        print(
            f"{step + 1:>3} {direction.value:>6} {fmt(swap_amount):>14} {fmt(amount_out):>14} "
            f"{fmt(exchange.get_price()):>12} {growth:>12.6%}"
        )

    amount_a, amount_b = exchange.remove_liquidity(shares, PROVIDER)
    print("-" * 72)
    print(f"Provider redeemed {fmt(amount_a)} A / {fmt(amount_b)} B")
    print(f"Events recorded: {len(exchange.events)}")
    logger.debug("simulation_done", reserves=exchange.get_reserves())
    return 0


if __name__ == "__main__":
    sys.exit(main())
