"""Display formatting for amounts and dates (vi-VN conventions)."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float]


def format_number(amount: Number) -> str:
    """
    Group digits with dots, as vi-VN does: 1234567 -> "1.234.567".

    VND has no minor unit, so amounts are rounded to whole dong.
    """
    whole = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{whole:,}".replace(",", ".")


def format_currency(amount: Number) -> str:
    """Format an amount in dong: 5000000 -> "5.000.000 ₫"."""
    return f"{format_number(amount)} ₫"


def format_date(value: date) -> str:
    """Format a date the vi-VN way: dd/mm/yyyy."""
    return value.strftime("%d/%m/%Y")
