from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

import pandas as pd


def format_currency(cents: object) -> str:
    """Format an amount in minor units as USD, e.g. 150050 -> "$1,500.50"."""
    if cents is None or pd.isna(cents):
        return "N/A"
    value = (Decimal(int(cents)) / Decimal(100)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(value: str) -> str:
    """Format an ISO date as "Mar 5, 2025"; unparseable input is returned as-is."""
    try:
        d = datetime.strptime(value, "%Y-%m-%d")
    except (TypeError, ValueError):
        return str(value)
    return f"{d:%b} {d.day}, {d.year}"
