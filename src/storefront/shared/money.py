"""Exact money handling.

Prices live in integer minor units (paise for INR). Decimal is used only at
the edges, when reading a catalogue price or showing an amount.
"""

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")
_SYMBOLS = {"INR": "₹", "USD": "$", "EUR": "€", "GBP": "£"}


def to_minor_units(amount) -> int:
    """Convert a major-unit amount (Decimal, str, int or float) to minor units."""
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(minor: int) -> Decimal:
    return (Decimal(minor) / 100).quantize(_CENT)


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_price(minor: int, currency: str = "INR") -> str:
    """Render an amount for display, e.g. ``format_price(299700) == "₹2,997.00"``."""
    sign = "-" if minor < 0 else ""
    whole, fraction = divmod(abs(minor), 100)
    grouped = _group_indian(str(whole)) if currency == "INR" else f"{whole:,}"
    symbol = _SYMBOLS.get(currency, f"{currency} ")
    return f"{sign}{symbol}{grouped}.{fraction:02d}"
