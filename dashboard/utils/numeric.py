"""Helpers for turning submitted money amounts into stored cents."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

CENT = Decimal("0.01")
# Largest value the 32-bit "invoices.amount" column holds
MAX_CENTS = 2**31 - 1


def coerce_amount(raw_value: Any) -> Optional[Decimal]:
    """Convert a submitted amount into a finite :class:`Decimal`.

    Blank input counts as zero, mirroring how browsers coerce an empty
    number field. ``None`` is returned for anything that is not a number.
    """

    if raw_value is None:
        return None
    if isinstance(raw_value, bool):
        return None
    if isinstance(raw_value, Decimal):
        value = raw_value
    elif isinstance(raw_value, (int, float)):
        value = Decimal(str(raw_value))
    else:
        text = str(raw_value).strip().replace(" ", "").replace(",", "")
        if text.startswith("$"):
            text = text[1:]
        if not text:
            return Decimal(0)
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    if not value.is_finite():
        return None
    return value


def to_cents(amount: Decimal) -> Optional[int]:
    """Return ``amount`` dollars as an integer number of cents.

    ``None`` is returned when the value has too many digits to round.
    """

    try:
        return int((amount * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return None


def from_cents(cents: Optional[int]) -> Decimal:
    """Return an integer amount of cents as dollars."""

    return (Decimal(cents or 0) / 100).quantize(CENT)
