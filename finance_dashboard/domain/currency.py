"""Rupiah amount parsing and formatting.

Amounts are whole rupiah (no subunits). Formatting follows the id-ID
locale: dot as thousands separator, "Rp" prefix.
"""

import re
from typing import Any

from finance_dashboard.utils.math_utils import round_half_up

THOUSANDS_SEPARATOR = "."
CURRENCY_SYMBOL = "Rp"

_NON_DIGITS = re.compile(r"\D")


def parse_amount(value: Any) -> int:
    """
    Parse user-entered currency text into whole rupiah.

    Every non-digit character is dropped, so "Rp 1.500.000" and "1,500,000"
    both give 1500000. Empty or unparseable input gives 0; never raises.
    """
    if value is None:
        return 0
    digits = _NON_DIGITS.sub("", str(value))
    return int(digits) if digits else 0


def format_amount(amount: float, separator: str = THOUSANDS_SEPARATOR) -> str:
    """Group digits in thousands: 1500000 -> "1.500.000" """
    return f"{round_half_up(amount):,}".replace(",", separator)


def format_currency_label(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Amount with currency prefix: "Rp 1.500.000", negatives as "-Rp 5.000" """
    rounded = round_half_up(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol} {format_amount(abs(rounded))}"


def format_compact_label(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Short chart-axis label: billions as "M" (miliar), millions as "jt" (juta)"""
    if amount >= 1_000_000_000:
        return f"{symbol} {amount / 1_000_000_000:.1f}M"
    if amount >= 1_000_000:
        return f"{symbol} {amount / 1_000_000:.0f}jt"
    return format_currency_label(amount, symbol)


def format_volume(volume: int) -> str:
    """Ticker volume: 1234567 -> "1.23M" """
    if volume >= 1_000_000_000:
        return f"{volume / 1_000_000_000:.2f}B"
    if volume >= 1_000_000:
        return f"{volume / 1_000_000:.2f}M"
    if volume >= 1_000:
        return f"{volume / 1_000:.2f}K"
    return str(volume)
