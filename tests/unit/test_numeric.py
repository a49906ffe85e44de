"""Unit tests for coercion and rounding of aggregate values."""

from decimal import Decimal

import pytest

from gamehub.games.numeric import percentage, round_half_up, to_float, to_int


class TestCoercion:
    def test_string_decimals_become_numbers(self):
        assert to_int("300") == 300
        assert to_float("88.50") == 88.5

    def test_decimal_values(self):
        assert to_int(Decimal("42")) == 42
        assert to_float(Decimal("2.25")) == 2.25

    def test_none_handling(self):
        assert to_int(None) == 0
        assert to_float(None) is None

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            to_float("not-a-number")


class TestRounding:
    def test_half_up_like_sql(self):
        assert round_half_up(Decimal("2.25"), 1) == 2.3
        assert round_half_up(Decimal("2.35"), 1) == 2.4
        assert round_half_up("0.125", 2) == 0.13

    def test_none_stays_none(self):
        assert round_half_up(None, 1) is None


class TestPercentage:
    def test_basic(self):
        assert percentage(8, 10) == 80.0

    def test_one_decimal(self):
        assert percentage(2, 3) == 66.7

    def test_zero_denominator_is_none(self):
        assert percentage(0, 0) is None
        assert percentage(5, None) is None

    def test_bounds(self):
        assert percentage(0, 7) == 0.0
        assert percentage(7, 7) == 100.0
