"""Append-only log of pool notifications."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

import structlog

from dex.models.events import LiquidityAdded, LiquidityRemoved, PoolEvent, Swap
from dex.pool.ledger import LiquidityChange
from dex.pool.swap import SwapResult

logger = structlog.get_logger()

E = TypeVar("E", LiquidityAdded, LiquidityRemoved, Swap)


class EventLog:
    """Ordered record of LiquidityAdded, LiquidityRemoved and Swap events.

    Observes the pool components but owns no pool state. Each event gets
    the next sequence number; events are never removed, except by
    truncate() when a transaction rolls back before completing.
    """

    def __init__(self) -> None:
        self._events: list[PoolEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[PoolEvent]:
        return iter(list(self._events))

    def all(self) -> list[PoolEvent]:
        return list(self._events)

    def of_type(self, event_type: type[E]) -> list[E]:
        """Return recorded events of one type, in order."""
        return [e for e in self._events if isinstance(e, event_type)]

    def last(self) -> PoolEvent | None:
        return self._events[-1] if self._events else None

    def liquidity_added(self, change: LiquidityChange) -> LiquidityAdded:
        event = LiquidityAdded(
            sequence=len(self._events),
            provider=change.provider,
            amount_a=change.amount_a,
            amount_b=change.amount_b,
            shares_minted=change.shares,
        )
        return self._record(event)

    def liquidity_removed(self, change: LiquidityChange) -> LiquidityRemoved:
        event = LiquidityRemoved(
            sequence=len(self._events),
            provider=change.provider,
            amount_a=change.amount_a,
            amount_b=change.amount_b,
            share_amount=change.shares,
        )
        return self._record(event)

    def swap(self, result: SwapResult) -> Swap:
        event = Swap(
            sequence=len(self._events),
            trader=result.trader,
            amount_in=result.amount_in,
            amount_out=result.amount_out,
            direction=result.direction,
        )
        return self._record(event)

    def truncate(self, length: int) -> None:
        """Drop events recorded after the log had the given length."""
        del self._events[length:]

    def _record(self, event: E) -> E:
        self._events.append(event)
        logger.info(event.kind, **event.model_dump(exclude={"kind"}, mode="json"))
        return event
