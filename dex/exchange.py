"""Exchange facade for a two-asset constant-product pool.

Exchange is the entry point for every pool operation. It owns the pool
state (ReservePool + LiquidityLedger), the SwapEngine and EventLog built
on it, and the two asset ledgers the pool settles against.

Each mutating operation is one transaction:
    validate -> compute -> apply -> settle transfers -> emit event
executed under a single lock. If any step fails, the reserves, the
touched share balance and the event log are restored and transfers
already made are reversed before the lock is released.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from dex.assets import AssetLedger, InMemoryAssetLedger
from dex.config import DEFAULT_POOL_CONFIG, PoolConfig
from dex.constants import ASSET_A, ASSET_B, POOL_ACCOUNT
from dex.errors import InvariantViolation, TransferFailed
from dex.events import EventLog
from dex.pool.ledger import LiquidityLedger
from dex.pool.reserves import PoolStatus, ReservePool
from dex.pool.swap import SwapDirection, SwapEngine

logger = structlog.get_logger()


class Settlement:
    """Asset transfers of one operation, reversible until it commits.

    Pulls (caller -> pool) are reversed by the pool sending the amount
    back. Pushes (pool -> caller) are preceded by a balance check on the
    pool account and are reversed by returning the amount from the
    recipient.
    """

    def __init__(self, pool_account: str) -> None:
        self.pool_account = pool_account
        self._undo: list[tuple[str, Callable[[], None]]] = []

    def __len__(self) -> int:
        return len(self._undo)

    def pull(self, ledger: AssetLedger, owner: str, amount: int) -> None:
        """Move amount from owner into the pool using the pool's allowance."""
        if amount == 0:
            return
        pool = self.pool_account
        self._call(ledger, "transfer_from", lambda: ledger.transfer_from(pool, owner, pool, amount))
        self._undo.append((ledger.symbol, lambda: ledger.transfer(pool, owner, amount)))

    def push(self, ledger: AssetLedger, recipient: str, amount: int) -> None:
        """Move amount from the pool to recipient."""
        if amount == 0:
            return
        pool = self.pool_account
        held = ledger.balance_of(pool)
        if held < amount:
            raise TransferFailed(f"{ledger.symbol}: pool holds {held}, cannot pay {amount}")
        self._call(ledger, "transfer", lambda: ledger.transfer(pool, recipient, amount))
        self._undo.append((ledger.symbol, lambda: ledger.transfer(recipient, pool, amount)))

    def revert(self) -> list[str]:
        """Reverse completed transfers, most recent first.

        Every reversal is attempted even if an earlier one fails.

        Returns:
            Symbols of the ledgers whose reversal failed
        """
        failed = []
        while self._undo:
            symbol, undo = self._undo.pop()
            try:
                undo()
            except Exception:
                logger.exception("settlement_revert_failed", symbol=symbol)
                failed.append(symbol)
        return failed

    @staticmethod
    def _call(ledger: AssetLedger, action: str, call: Callable[[], None]) -> None:
        try:
            call()
        except TransferFailed:
            raise
        except Exception as err:
            raise TransferFailed(f"{ledger.symbol}: {action} failed: {err}") from err


class Exchange:
    """Two-asset constant-product exchange with liquidity provider shares.

    Args:
        asset_a: Ledger of asset A
        asset_b: Ledger of asset B
        config: Fee and price-scale configuration, fixed for the pool's lifetime
        pool_account: Identity under which the pool holds its reserves
    """

    def __init__(
        self,
        asset_a: AssetLedger,
        asset_b: AssetLedger,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
        pool_account: str = POOL_ACCOUNT,
    ) -> None:
        self.asset_a = asset_a
        self.asset_b = asset_b
        self.config = config
        self.pool_account = pool_account

        self._lock = threading.RLock()
        self._pool = ReservePool()
        self._ledger = LiquidityLedger(self._pool)
        self._engine = SwapEngine(self._pool, config)
        self._events = EventLog()

    def __repr__(self) -> str:
        return (
            f"Exchange({self.asset_a.symbol}/{self.asset_b.symbol}, "
            f"reserves={self._pool.reserves()}, shares={self._pool.total_shares})"
        )

    # --- Read-only interface ---

    @property
    def events(self) -> EventLog:
        return self._events

    @property
    def status(self) -> PoolStatus:
        with self._lock:
            return self._pool.status

    def get_reserves(self) -> tuple[int, int]:
        """Get reserves as (reserve_a, reserve_b)."""
        with self._lock:
            return self._pool.reserves()

    def get_price(self) -> int:
        """Spot price of A in B scaled by config.price_scale; 0 for an empty pool."""
        with self._lock:
            return self._engine.get_price()

    def liquidity(self, account: str) -> int:
        with self._lock:
            return self._ledger.liquidity(account)

    def total_liquidity(self) -> int:
        with self._lock:
            return self._ledger.total_liquidity()

    def get_amount_out(self, amount_in: int, direction: SwapDirection) -> int:
        """Quote a swap without executing it.

        Raises the same errors the swap itself would.
        """
        with self._lock:
            return self._engine.get_amount_out(amount_in, direction)

    def ledger_for(self, asset: str) -> AssetLedger:
        """Return the ledger of asset "A" or "B"."""
        if asset == ASSET_A:
            return self.asset_a
        if asset == ASSET_B:
            return self.asset_b
        raise ValueError(f"Asset {asset} not in pool")

    # --- Mutating interface ---

    def mint(self, asset: str, account: str, amount: int) -> None:
        """Credit amount of an in-memory asset to account.

        Raises:
            TypeError: If the asset's ledger cannot mint
        """
        ledger = self.ledger_for(asset)
        mint = getattr(ledger, "mint", None)
        if mint is None:
            raise TypeError(f"Asset {asset} ledger {ledger!r} does not support minting")
        with self._lock:
            mint(account, amount)

    def approve(self, asset: str, owner: str, amount: int) -> None:
        """Allow the pool to pull up to amount of owner's asset."""
        ledger = self.ledger_for(asset)
        with self._lock:
            ledger.approve(owner, self.pool_account, amount)

    def add_liquidity(self, amount_a: int, amount_b: int, caller: str) -> int:
        """Deposit amount_a of A and amount_b of B, minting shares to caller.

        Returns:
            Number of shares minted

        Raises:
            InvalidAmount: If either amount is zero
            TransferFailed: If either deposit is declined
        """
        with self._transaction("add_liquidity", caller) as settlement:
            change = self._ledger.add_liquidity(amount_a, amount_b, caller)
            settlement.pull(self.asset_a, caller, change.amount_a)
            settlement.pull(self.asset_b, caller, change.amount_b)
            self._events.liquidity_added(change)
        return change.shares

    def remove_liquidity(self, share_amount: int, caller: str) -> tuple[int, int]:
        """Burn share_amount of caller's shares for a proportional cut of both reserves.

        Returns:
            Tuple of (amount_a, amount_b) paid to caller

        Raises:
            InvalidAmount: If share_amount is zero
            InsufficientShares: If caller holds fewer than share_amount shares
            TransferFailed: If a payout is declined
        """
        with self._transaction("remove_liquidity", caller) as settlement:
            change = self._ledger.remove_liquidity(share_amount, caller)
            settlement.push(self.asset_a, caller, change.amount_a)
            settlement.push(self.asset_b, caller, change.amount_b)
            self._events.liquidity_removed(change)
        return change.amount_a, change.amount_b

    def swap(self, amount_in: int, direction: SwapDirection, caller: str) -> int:
        """Sell amount_in of one asset to the pool for the other.

        Returns:
            Amount of the output asset paid to caller

        Raises:
            ZeroInput: If amount_in is zero
            EmptyPool: If either reserve is zero
            TransferFailed: If the deposit or payout is declined
        """
        if direction == SwapDirection.A_TO_B:
            ledger_in, ledger_out = self.asset_a, self.asset_b
        else:
            ledger_in, ledger_out = self.asset_b, self.asset_a

        with self._transaction("swap", caller) as settlement:
            result = self._engine.swap(amount_in, direction, caller)
            settlement.pull(ledger_in, caller, result.amount_in)
            settlement.push(ledger_out, caller, result.amount_out)
            self._events.swap(result)
        return result.amount_out

    def swap_a_for_b(self, amount_in: int, caller: str) -> int:
        return self.swap(amount_in, SwapDirection.A_TO_B, caller)

    def swap_b_for_a(self, amount_in: int, caller: str) -> int:
        return self.swap(amount_in, SwapDirection.B_TO_A, caller)

    @contextmanager
    def _transaction(self, operation: str, caller: str) -> Iterator[Settlement]:
        """Run one operation atomically against the pool."""
        with self._lock:
            snapshot = self._pool.snapshot()
            shares_before = self._ledger.liquidity(caller)
            events_before = len(self._events)
            settlement = Settlement(self.pool_account)
            try:
                yield settlement
                self._pool.check_invariants()
            except Exception as err:
                mutated = self._pool.snapshot() != snapshot or len(settlement) > 0
                unreverted = settlement.revert()
                self._pool.restore(snapshot)
                self._ledger.set_liquidity(caller, shares_before)
                self._events.truncate(events_before)
                if mutated:
                    logger.error(
                        "operation_rolled_back",
                        operation=operation,
                        caller=caller,
                        error=type(err).__name__,
                        detail=str(err),
                    )
                else:
                    logger.warning(
                        "operation_rejected",
                        operation=operation,
                        caller=caller,
                        error=type(err).__name__,
                        detail=str(err),
                    )
                if unreverted:
                    raise InvariantViolation(
                        f"{operation} failed and its transfers of {', '.join(unreverted)} "
                        "could not be reversed; asset balances no longer match reserves"
                    ) from err
                raise


def create_exchange(config: PoolConfig | None = None) -> Exchange:
    """Create an exchange over two fresh in-memory asset ledgers.

    Args:
        config: Pool configuration; read from the environment if None

    Returns:
        Configured Exchange instance
    """
    config = config or PoolConfig.from_env()
    logger.info(
        "exchange_created",
        fee_numerator=config.fee_numerator,
        fee_denominator=config.fee_denominator,
        fee_rate=str(config.fee_rate),
    )
    return Exchange(
        InMemoryAssetLedger(ASSET_A, name="Token A"),
        InMemoryAssetLedger(ASSET_B, name="Token B"),
        config=config,
    )


_default_exchange: Exchange | None = None
_default_lock = threading.Lock()


def get_default_exchange() -> Exchange:
    """Return the process-wide exchange, creating it on first use."""
    global _default_exchange
    with _default_lock:
        if _default_exchange is None:
            _default_exchange = create_exchange()
        return _default_exchange
