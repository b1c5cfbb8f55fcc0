from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

MoneyLike = Union[Decimal, str, int, float]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: MoneyLike) -> Decimal:
    """Convert through ``str`` so floats never leak binary rounding error."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal value: {value!r}") from exc


def to_money(value: MoneyLike) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, percent: Decimal) -> Decimal:
    return amount * percent / Decimal(100)


def format_percent(percent: MoneyLike) -> str:
    # 20 -> "20", 12.50 -> "12.5"
    percent = to_decimal(percent)
    if percent == percent.to_integral_value():
        return str(int(percent))
    return format(percent.normalize(), "f")
