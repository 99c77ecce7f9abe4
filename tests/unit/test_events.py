"""Tests for the EventLog and event models."""

from pydantic import TypeAdapter

from dex.events import EventLog
from dex.models.events import LiquidityAdded, LiquidityRemoved, PoolEvent, Swap
from dex.pool.ledger import LiquidityChange
from dex.pool.swap import SwapDirection, SwapResult
from tests.helpers import OWNER


class TestEventLog:
    """Tests for recording and querying events."""

    def test_starts_empty(self):
        log = EventLog()
        assert len(log) == 0
        assert log.last() is None
        assert log.all() == []

    def test_records_in_order_with_sequence(self):
        log = EventLog()
        log.liquidity_added(LiquidityChange(OWNER, 100, 200, 141))
        log.swap(SwapResult(OWNER, SwapDirection.A_TO_B, 10, 18))
        log.liquidity_removed(LiquidityChange(OWNER, 110, 182, 141))

        kinds = [e.kind for e in log]
        assert kinds == ["LiquidityAdded", "Swap", "LiquidityRemoved"]
        assert [e.sequence for e in log] == [0, 1, 2]

    def test_liquidity_added_fields(self):
        log = EventLog()
        event = log.liquidity_added(LiquidityChange(OWNER, 100, 200, 141))

        assert isinstance(event, LiquidityAdded)
        assert (event.provider, event.amount_a, event.amount_b) == (OWNER, 100, 200)
        assert event.shares_minted == 141

    def test_liquidity_removed_fields(self):
        log = EventLog()
        event = log.liquidity_removed(LiquidityChange(OWNER, 50, 100, 70))

        assert isinstance(event, LiquidityRemoved)
        assert event.share_amount == 70

    def test_swap_fields(self):
        log = EventLog()
        event = log.swap(SwapResult(OWNER, SwapDirection.B_TO_A, 20, 9))

        assert isinstance(event, Swap)
        assert event.trader == OWNER
        assert (event.amount_in, event.amount_out) == (20, 9)
        assert event.direction == SwapDirection.B_TO_A

    def test_of_type(self):
        log = EventLog()
        log.liquidity_added(LiquidityChange(OWNER, 1, 1, 1))
        log.swap(SwapResult(OWNER, SwapDirection.A_TO_B, 10, 5))
        log.swap(SwapResult(OWNER, SwapDirection.B_TO_A, 10, 5))

        assert len(log.of_type(Swap)) == 2
        assert len(log.of_type(LiquidityAdded)) == 1
        assert log.of_type(LiquidityRemoved) == []

    def test_truncate(self):
        log = EventLog()
        log.liquidity_added(LiquidityChange(OWNER, 1, 1, 1))
        log.swap(SwapResult(OWNER, SwapDirection.A_TO_B, 10, 5))
        log.truncate(1)

        assert len(log) == 1
        assert isinstance(log.last(), LiquidityAdded)

    def test_all_returns_copy(self):
        log = EventLog()
        log.liquidity_added(LiquidityChange(OWNER, 1, 1, 1))
        log.all().clear()
        assert len(log) == 1


class TestEventSerialization:
    """Tests for the wire format of events."""

    def test_camel_case_and_string_amounts(self):
        event = Swap(
            sequence=0,
            trader=OWNER,
            amount_in=10**30,
            amount_out=5,
            direction=SwapDirection.A_TO_B,
        )
        data = event.model_dump(by_alias=True, mode="json")

        assert data == {
            "kind": "Swap",
            "sequence": 0,
            "trader": OWNER,
            "amountIn": str(10**30),
            "amountOut": "5",
            "direction": "A_TO_B",
        }

    def test_discriminated_union_parses(self):
        adapter = TypeAdapter(PoolEvent)
        event = adapter.validate_python(
            {
                "kind": "LiquidityRemoved",
                "sequence": 3,
                "provider": OWNER,
                "amountA": "10",
                "amountB": "20",
                "shareAmount": "14",
            }
        )

        assert isinstance(event, LiquidityRemoved)
        assert event.amount_b == 20
