from __future__ import annotations

from decimal import Decimal

import pytest

from bithumb_relay.common.exceptions.base import ValidationError
from bithumb_relay.core.trading.quantity import (
    derive_buy_units,
    estimate_amount,
    format_units,
    to_decimal,
)


def test_buy_units_for_even_division() -> None:
    assert derive_buy_units(Decimal("10000"), Decimal("500")) == "20.0000"


def test_buy_units_round_half_up_at_fourth_digit() -> None:
    # 10000 / 3 = 3333.33333...
    assert derive_buy_units(Decimal("10000"), Decimal("3")) == "3333.3333"
    # 1 / 8 = 0.125 -> 0.1250, 1 / 1600 = 0.000625 -> 0.0006
    assert derive_buy_units(Decimal("1"), Decimal("8")) == "0.1250"
    assert derive_buy_units(Decimal("1"), Decimal("1600")) == "0.0006"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("3.12345", "3.1235"),
        ("3.12344", "3.1234"),
        ("7", "7.0000"),
        ("0.00005", "0.0001"),
        ("1e3", "1000.0000"),
    ],
)
def test_format_units(raw: str, expected: str) -> None:
    assert format_units(Decimal(raw)) == expected


def test_format_units_from_float_input() -> None:
    assert format_units(to_decimal(3.12345, "units")) == "3.1235"


def test_estimate_amount_uses_transmitted_units() -> None:
    # 3.1235 * 500 = 1561.75 -> 1562
    assert estimate_amount("3.1235", Decimal("500")) == "1562"
    # 2.0000 * 812.25 = 1624.5 -> 1625 (half up)
    assert estimate_amount("2.0000", Decimal("812.25")) == "1625"


@pytest.mark.parametrize("value", [0, "0", -1, "-0.5", None, "", "  ", "abc", "NaN", "Infinity", True])
def test_to_decimal_rejects_invalid_input(value: object) -> None:
    with pytest.raises(ValidationError):
        to_decimal(value, "매도 수량")


@pytest.mark.parametrize("value, expected", [("10000", Decimal("10000")), (1.5, Decimal("1.5")), (" 2 ", Decimal("2"))])
def test_to_decimal_accepts_positive_numbers(value: object, expected: Decimal) -> None:
    assert to_decimal(value, "매수 금액") == expected


@pytest.mark.parametrize("value", ["1e30", 1e40, "1000000000000001"])
def test_to_decimal_rejects_oversized_input(value: object) -> None:
    with pytest.raises(ValidationError):
        to_decimal(value, "매도 수량")


def test_to_decimal_accepts_upper_bound() -> None:
    assert format_units(to_decimal("1000000000000000", "매도 수량")) == "1000000000000000.0000"


def test_quantize_overflow_is_a_validation_error() -> None:
    with pytest.raises(ValidationError):
        format_units(Decimal("1e30"))
    with pytest.raises(ValidationError):
        derive_buy_units(Decimal("1000000000000000"), Decimal("1e-20"))
    with pytest.raises(ValidationError):
        estimate_amount("1000000000000000.0000", Decimal("1e20"))
