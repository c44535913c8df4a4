"""Jinja filters for money and dates."""

from __future__ import annotations

import sys
from datetime import date, datetime
from typing import Optional, Union

from dashboard.utils.numeric import from_cents


def format_currency(cents: Optional[int]) -> str:
    """Render an amount stored in cents as ``$1,234.50``."""

    value = from_cents(cents)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(value: Union[date, datetime, None], fmt: str = "%b %-d, %Y") -> str:
    if value is None:
        return ""
    if sys.platform.startswith("win"):
        fmt = fmt.replace("%-", "%#")
    return value.strftime(fmt)
