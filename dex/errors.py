"""Exchange error classes.

Messages match the revert reasons of the pool contract the engine models
("Zero amount", "Zero input", "Empty pool", "Not enough LP").
"""


class DexError(Exception):
    """Base error for exchange operations."""

    pass


class InvalidAmount(DexError):
    """A required amount is zero, negative, or too small to be meaningful."""

    pass


class ZeroInput(InvalidAmount):
    """Swap input amount is zero."""

    pass


class EmptyPool(DexError):
    """Swap attempted against a pool with a zero reserve."""

    pass


class InsufficientShares(DexError):
    """Redemption exceeds the caller's share balance."""

    pass


class TransferFailed(DexError):
    """An asset ledger declined a transfer."""

    pass


class InvariantViolation(DexError):
    """Pool accounting left a state that must be unreachable."""

    pass
