from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from checkout.errors import InvalidCouponError
from checkout.money import format_percent, percent_of, to_decimal, to_money
from checkout.promotions import split_spec


class Coupon(ABC):
    """Cart-wide discount applied once to the subtotal after promotions."""

    name: str

    @abstractmethod
    def discount(self, amount: Decimal) -> Decimal: ...

    @property
    @abstractmethod
    def description(self) -> str: ...


@dataclass(frozen=True, slots=True)
class PercentCoupon(Coupon):
    name: str
    percent: Decimal

    def discount(self, amount: Decimal) -> Decimal:
        return to_money(percent_of(amount, self.percent))

    @property
    def description(self) -> str:
        return f"{format_percent(self.percent)}% off"


@dataclass(frozen=True, slots=True)
class AmountCoupon(Coupon):
    name: str
    amount: Decimal

    def discount(self, amount: Decimal) -> Decimal:
        # Never takes the subtotal below zero.
        return to_money(min(amount, self.amount))

    @property
    def description(self) -> str:
        return f"{self.amount:.2f} off"


def build_coupon(name: str, spec: Mapping[str, Any]) -> Coupon:
    if not isinstance(spec, Mapping):
        raise InvalidCouponError(f"Coupon {name}: spec must be a mapping, got {spec!r}")

    kind, value = split_spec(spec)
    if isinstance(value, Mapping) and kind in value:
        value = value[kind]
    if kind not in ("percent", "amount"):
        raise InvalidCouponError(f"Coupon {name}: unknown coupon kind {kind!r}")
    try:
        amount = to_decimal(value)
    except ValueError as exc:
        raise InvalidCouponError(f"Coupon {name}: {exc}") from exc
    if not amount.is_finite() or amount < 0:
        raise InvalidCouponError(f"Coupon {name}: {kind} must be a non-negative number, got {value!r}")

    if kind == "percent":
        return PercentCoupon(name=name, percent=amount)
    return AmountCoupon(name=name, amount=to_money(amount))
