"""Tests for SafeInt checked arithmetic."""

import pytest

from dex.safe_int import (
    UINT256_MAX,
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
    mul_div,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_bounds_accepted(self):
        """Zero and uint256 max are both valid."""
        assert SafeInt(0).value == 0
        assert SafeInt(UINT256_MAX).value == UINT256_MAX

    def test_negative_raises(self):
        """Negative values are not uint256."""
        with pytest.raises(Uint256Overflow):
            SafeInt(-1)

    def test_above_max_raises(self):
        with pytest.raises(Uint256Overflow):
            SafeInt(UINT256_MAX + 1)

    def test_invalid_type_raises(self):
        """SafeInt rejects non-int types, including bool."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add(self):
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15

    def test_add_overflow_raises(self):
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX) + 1

    def test_sub(self):
        assert (S(10) - S(4)).value == 6

    def test_sub_to_zero(self):
        assert (S(7) - 7).value == 0

    def test_sub_underflow_raises(self):
        with pytest.raises(Underflow):
            S(4) - S(10)

    def test_mul(self):
        assert (S(6) * S(7)).value == 42
        assert (6 * S(7)).value == 42

    def test_mul_overflow_raises(self):
        """A product beyond uint256 fails instead of growing unbounded."""
        with pytest.raises(Uint256Overflow):
            S(2**128) * S(2**128)

    def test_mul_at_limit(self):
        assert (S(2**255) * 1).value == 2**255

    def test_floordiv(self):
        assert (S(10) // S(3)).value == 3
        assert (S(10) // 3).value == 3

    def test_floordiv_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(10) // 0

    def test_errors_are_arithmetic_errors(self):
        """All SafeInt errors share a base class usable in except clauses."""
        assert issubclass(DivisionByZero, SafeIntError)
        assert issubclass(Underflow, SafeIntError)
        assert issubclass(Uint256Overflow, SafeIntError)
        assert issubclass(SafeIntError, ArithmeticError)


class TestSafeIntNamedOperations:
    """Tests for min, isqrt and mul_div."""

    def test_min(self):
        assert S(3).min(5).value == 3
        assert S(9).min(S(5)).value == 5

    @pytest.mark.parametrize(
        "value,expected",
        [(0, 0), (1, 1), (3, 1), (4, 2), (20_000, 141), (10**36, 10**18)],
    )
    def test_isqrt(self, value, expected):
        assert S(value).isqrt().value == expected

    def test_isqrt_of_geometric_mean(self):
        """isqrt(100e18 * 200e18) is the first-deposit share count for 100/200."""
        assert S(100 * 10**18 * 200 * 10**18).isqrt().value == 141421356237309504880

    def test_mul_div(self):
        assert mul_div(7, 3, 2) == 10
        assert mul_div(S(7), S(3), S(2)) == 10

    def test_mul_div_keeps_precision(self):
        """The product is formed before dividing."""
        assert mul_div(1, 10**18, 3) == 333333333333333333

    def test_mul_div_overflow_raises(self):
        with pytest.raises(Uint256Overflow):
            mul_div(2**200, 2**100, 1)

    def test_mul_div_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            mul_div(1, 1, 0)


class TestSafeIntComparison:
    """Tests for comparisons and conversions."""

    def test_equality(self):
        assert S(5) == S(5)
        assert S(5) == 5
        assert S(5) != 6

    def test_ordering(self):
        assert S(1) < S(2)
        assert S(2) <= 2
        assert S(3) > 2
        assert S(3) >= S(3)

    def test_bool(self):
        assert not S(0)
        assert S(1)

    def test_int_conversion(self):
        assert int(S(9)) == 9
        assert [0, 1, 2][S(1)] == 1

    def test_hash_matches_int(self):
        assert hash(S(12)) == hash(12)
