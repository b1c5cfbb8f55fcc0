from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Tuple

from checkout.errors import InvalidPromotionError
from checkout.money import ZERO, format_percent, percent_of, to_decimal, to_money

logger = logging.getLogger(__name__)


class Promotion(ABC):
    """
    Per-product volume discount.

    A promotion is stateless: the discount depends only on the unit price and
    the purchased quantity, and is always returned rounded to cents.
    """

    @abstractmethod
    def discount(self, price: Decimal, quantity: int) -> Decimal: ...

    @property
    @abstractmethod
    def description(self) -> str: ...


@dataclass(frozen=True, slots=True)
class NoPromotion(Promotion):
    def discount(self, price: Decimal, quantity: int) -> Decimal:
        return ZERO

    @property
    def description(self) -> str:
        return ""


@dataclass(frozen=True, slots=True)
class GetOneFree(Promotion):
    """Every ``n``-th unit is free."""

    n: int

    def __post_init__(self) -> None:
        if self.n < 1:
            raise InvalidPromotionError(f"get_one_free needs n >= 1, got {self.n}")

    def discount(self, price: Decimal, quantity: int) -> Decimal:
        free_units = quantity // self.n
        return to_money(price * free_units)

    @property
    def description(self) -> str:
        return f"buy {self.n - 1}, get 1 free"


@dataclass(frozen=True, slots=True)
class PackagePromotion(Promotion):
    """``percent`` off every complete package of ``size`` units."""

    size: int
    percent: Decimal

    def __post_init__(self) -> None:
        if self.size < 1:
            raise InvalidPromotionError(f"package needs size >= 1, got {self.size}")

    def discount(self, price: Decimal, quantity: int) -> Decimal:
        packages = quantity // self.size
        return to_money(percent_of(packages * self.size * price, self.percent))

    @property
    def description(self) -> str:
        return f"get {format_percent(self.percent)}% off for every {self.size}"


@dataclass(frozen=True, slots=True)
class ThresholdPromotion(Promotion):
    """``percent`` off every unit after the first ``count``."""

    count: int
    percent: Decimal

    def __post_init__(self) -> None:
        if self.count < 0:
            raise InvalidPromotionError(f"threshold needs count >= 0, got {self.count}")

    def discount(self, price: Decimal, quantity: int) -> Decimal:
        extra = max(0, quantity - self.count)
        return to_money(percent_of(extra * price, self.percent))

    @property
    def description(self) -> str:
        return (
            f"{format_percent(self.percent)}% off of every after the "
            f"{self.count}{ordinal_suffix(self.count)}"
        )


def ordinal_suffix(number: int) -> str:
    return {1: "st", 2: "nd", 3: "rd"}.get(number, "th")


def split_spec(spec: Mapping[str, Any]) -> Tuple[Optional[str], Any]:
    """
    Split a catalog spec into ``(kind, params)``.

    Two shapes are accepted: ``{"kind": ..., "params": ...}`` and the compact
    single-key form ``{kind: params}``.
    """
    if "kind" in spec:
        return spec["kind"], spec.get("params")
    if len(spec) == 1:
        kind, params = next(iter(spec.items()))
        return str(kind), params
    return None, None


def _pair(params: Any, first: str, second: str) -> Tuple[Any, Any]:
    # {5: 20}, {"size": 5, "percent": 20} or (5, 20)
    if isinstance(params, Mapping):
        if first in params and second in params:
            return params[first], params[second]
        if len(params) == 1:
            return next(iter(params.items()))
    elif isinstance(params, (tuple, list)) and len(params) == 2:
        return params[0], params[1]
    raise InvalidPromotionError(f"Expected ({first}, {second}) parameters, got {params!r}")


def _int_param(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidPromotionError(f"Expected an integer, got {value!r}") from exc


def _percent_param(value: Any) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise InvalidPromotionError(str(exc)) from exc


def build_promotion(spec: Any = None) -> Promotion:
    """Build a promotion from a catalog spec; absent or unknown kinds mean no promotion."""
    if spec is None:
        return NoPromotion()
    if isinstance(spec, Promotion):
        return spec
    if not isinstance(spec, Mapping):
        logger.warning("promotion spec %r is not a mapping, using no promotion", spec)
        return NoPromotion()

    kind, params = split_spec(spec)
    if kind == "get_one_free":
        if isinstance(params, Mapping) and "n" in params:
            params = params["n"]
        return GetOneFree(_int_param(params))
    if kind == "package":
        size, percent = _pair(params, "size", "percent")
        return PackagePromotion(_int_param(size), _percent_param(percent))
    if kind == "threshold":
        count, percent = _pair(params, "count", "percent")
        return ThresholdPromotion(_int_param(count), _percent_param(percent))

    logger.warning("unknown promotion kind %r, using no promotion", kind)
    return NoPromotion()
