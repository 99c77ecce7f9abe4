"""Validation of caller-supplied amounts."""

from dex.errors import InvalidAmount
from dex.safe_int import UINT256_MAX, Uint256Overflow


def require_amount(value: int, name: str) -> int:
    """Check that value is a uint256 amount.

    Zero is accepted here; each operation decides whether zero is allowed.

    Raises:
        TypeError: If value is not an int (bool is rejected)
        InvalidAmount: If value is negative
        Uint256Overflow: If value exceeds 2^256-1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if value < 0:
        raise InvalidAmount(f"{name} cannot be negative: {value}")
    if value > UINT256_MAX:
        raise Uint256Overflow(f"{name} exceeds uint256 max: {value}")
    return value
