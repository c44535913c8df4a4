from decimal import Decimal

import pytest

from dashboard.utils.formatting import format_currency
from dashboard.utils.numeric import coerce_amount, from_cents, to_cents


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.34", Decimal("12.34")),
        (" 1,250.5 ", Decimal("1250.5")),
        ("$8", Decimal("8")),
        ("", Decimal("0")),
        (7, Decimal("7")),
        (2.5, Decimal("2.5")),
        ("abc", None),
        ("Infinity", None),
        (None, None),
        (True, None),
    ],
)
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


def test_to_cents_rounds_half_up():
    assert to_cents(Decimal("12.34")) == 1234
    assert to_cents(Decimal("0.005")) == 1
    assert to_cents(Decimal("0.1") + Decimal("0.2")) == 30
    assert to_cents(Decimal("100")) == 10000


def test_to_cents_returns_none_when_too_many_digits():
    assert to_cents(Decimal("1e30")) is None
    assert to_cents(Decimal("123456789012345678901234567890")) is None


def test_from_cents():
    assert from_cents(15795) == Decimal("157.95")
    assert from_cents(None) == Decimal("0.00")


def test_format_currency():
    assert format_currency(123456789) == "$1,234,567.89"
    assert format_currency(0) == "$0.00"
    assert format_currency(-250) == "-$2.50"
