"""Fungible asset ledgers the pool settles against.

The exchange only needs the AssetLedger protocol. InMemoryAssetLedger is
a complete ERC-20-style implementation (balances, allowances, minting)
used by the HTTP service and the tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from dex.errors import TransferFailed
from dex.pool.amounts import require_amount
from dex.safe_int import S

logger = structlog.get_logger()


@runtime_checkable
class AssetLedger(Protocol):
    """Capability set of one fungible asset.

    Implementations raise TransferFailed when a transfer is declined.
    """

    symbol: str

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        """Move amount from owner to recipient using spender's allowance."""
        ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        """Move amount from sender to recipient."""
        ...

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """Allow spender to move up to amount of owner's balance."""
        ...

    def balance_of(self, account: str) -> int:
        ...


class InMemoryAssetLedger:
    """ERC-20-style ledger held in process memory.

    Zero balances and allowances are omitted to keep the tables sparse.
    """

    def __init__(self, symbol: str, name: str | None = None) -> None:
        self.symbol = symbol
        self.name = name or symbol
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0

    def __repr__(self) -> str:
        return f"InMemoryAssetLedger({self.symbol!r}, {len(self._balances)} holders)"

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def mint(self, account: str, amount: int) -> None:
        """Create amount new units in account.

        Raises:
            Uint256Overflow: If total supply would exceed 2^256-1
        """
        require_amount(amount, "amount")
        # Every balance is bounded by total supply
        new_supply = (S(self._total_supply) + amount).value
        self._set_balance(account, self.balance_of(account) + amount)
        self._total_supply = new_supply
        logger.debug("asset_minted", symbol=self.symbol, account=account, amount=amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        require_amount(amount, "amount")
        if amount == 0:
            self._allowances.pop((owner, spender), None)
        else:
            self._allowances[(owner, spender)] = amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        """Move amount from sender to recipient.

        Raises:
            TransferFailed: If sender's balance is below amount
        """
        require_amount(amount, "amount")
        self._move(sender, recipient, amount)

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        """Move amount from owner to recipient, consuming spender's allowance.

        Raises:
            TransferFailed: If the allowance or owner's balance is below amount
        """
        require_amount(amount, "amount")
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise TransferFailed(
                f"{self.symbol}: insufficient allowance for {spender} on {owner}: "
                f"{allowed} < {amount}"
            )
        self._move(owner, recipient, amount)
        self.approve(owner, spender, allowed - amount)

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        balance = self.balance_of(sender)
        if balance < amount:
            raise TransferFailed(
                f"{self.symbol}: insufficient balance for {sender}: {balance} < {amount}"
            )
        self._set_balance(sender, balance - amount)
        self._set_balance(recipient, self.balance_of(recipient) + amount)

    def _set_balance(self, account: str, amount: int) -> None:
        if amount == 0:
            self._balances.pop(account, None)
        else:
            self._balances[account] = amount
