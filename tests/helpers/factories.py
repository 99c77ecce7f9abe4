"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_exchange, fund

    exchange = make_exchange()
    fund(exchange, OWNER, 100 * ETHER, 200 * ETHER)
"""

from dex.assets import InMemoryAssetLedger
from dex.config import DEFAULT_POOL_CONFIG, PoolConfig
from dex.errors import TransferFailed
from dex.exchange import Exchange


def make_exchange(config: PoolConfig = DEFAULT_POOL_CONFIG) -> Exchange:
    """Create an exchange over two fresh in-memory ledgers named TKA and TKB."""
    return Exchange(
        InMemoryAssetLedger("TKA", name="Token A"),
        InMemoryAssetLedger("TKB", name="Token B"),
        config=config,
    )


def fund(exchange: Exchange, account: str, amount_a: int, amount_b: int) -> None:
    """Mint both assets to account and approve the pool to pull all of it."""
    for ledger, amount in ((exchange.asset_a, amount_a), (exchange.asset_b, amount_b)):
        ledger.mint(account, amount)  # type: ignore[attr-defined]
        ledger.approve(account, exchange.pool_account, ledger.balance_of(account))


def seeded_exchange(
    account: str,
    amount_a: int,
    amount_b: int,
    config: PoolConfig = DEFAULT_POOL_CONFIG,
) -> Exchange:
    """Create an exchange where account has deposited (amount_a, amount_b)."""
    exchange = make_exchange(config)
    fund(exchange, account, amount_a, amount_b)
    exchange.add_liquidity(amount_a, amount_b, account)
    return exchange


class FailingLedger:
    """Asset ledger wrapper that fails on chosen calls.

    Usage:
        # Decline every transfer() made through this ledger
        ledger = FailingLedger(inner, fail_on={"transfer"})

        # Blow up with a non-ledger error on transfer_from()
        ledger = FailingLedger(inner, fail_on={"transfer_from"}, error=RuntimeError("boom"))
    """

    def __init__(
        self,
        inner: InMemoryAssetLedger,
        fail_on: set[str],
        error: Exception | None = None,
    ) -> None:
        self.inner = inner
        self.symbol = inner.symbol
        self.fail_on = set(fail_on)
        self.error = error
        self.calls: list[tuple[str, tuple]] = []  # Track calls for assertions

    def _maybe_fail(self, name: str, args: tuple) -> None:
        self.calls.append((name, args))
        if name in self.fail_on:
            if self.error is not None:
                raise self.error
            raise TransferFailed(f"{self.symbol}: {name} declined")

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        self._maybe_fail("transfer_from", (spender, owner, recipient, amount))
        self.inner.transfer_from(spender, owner, recipient, amount)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        self._maybe_fail("transfer", (sender, recipient, amount))
        self.inner.transfer(sender, recipient, amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        self.inner.approve(owner, spender, amount)

    def balance_of(self, account: str) -> int:
        return self.inner.balance_of(account)

    def mint(self, account: str, amount: int) -> None:
        self.inner.mint(account, amount)
