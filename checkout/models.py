from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from checkout.errors import InvalidNameError, InvalidPriceError
from checkout.money import CENT, MoneyLike, to_decimal
from checkout.promotions import NoPromotion, Promotion

MAX_NAME_LENGTH = 40
MIN_PRICE = Decimal("0.01")
MAX_PRICE = Decimal("999.99")


def parse_price(price: MoneyLike) -> Decimal:
    try:
        value = to_decimal(price)
    except ValueError as exc:
        raise InvalidPriceError(str(exc)) from exc
    if not value.is_finite() or not MIN_PRICE <= value <= MAX_PRICE:
        raise InvalidPriceError(f"Price {price} is not in the range of {MIN_PRICE} and {MAX_PRICE}")
    if value != value.quantize(CENT):
        raise InvalidPriceError(f"Price {price} has more than two decimal places")
    return value.quantize(CENT)


@dataclass(frozen=True, slots=True, eq=False)
class Product:
    """
    Catalog entry.

    Products compare by identity: a cart keys its quantities by the product
    object registered in its inventory.
    """

    name: str
    price: Decimal
    promotion: Promotion = field(default_factory=NoPromotion)

    def __post_init__(self) -> None:
        if len(self.name) > MAX_NAME_LENGTH:
            raise InvalidNameError(f"Product name {self.name!r} exceeds {MAX_NAME_LENGTH} symbols")
        object.__setattr__(self, "price", parse_price(self.price))
