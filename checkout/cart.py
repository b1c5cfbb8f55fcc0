from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, List, Optional

from checkout.coupons import Coupon
from checkout.errors import InvalidQuantityError, UnknownCouponError, UnknownProductError
from checkout.invoice import render_invoice
from checkout.models import Product
from checkout.money import ZERO

if TYPE_CHECKING:
    from checkout.inventory import Inventory

logger = logging.getLogger(__name__)

MAX_QUANTITY = 99


@dataclass(slots=True)
class CartLine:
    product: Product
    quantity: int
    price: Decimal
    discount: Decimal

    @property
    def total(self) -> Decimal:
        return self.price - self.discount


class Cart:
    """
    Quantities per product plus at most one coupon.

    Line order is the order in which products were first added; totals and
    the invoice both follow it.
    """

    def __init__(self, inventory: Inventory):
        self.inventory = inventory
        self._quantities: Dict[Product, int] = {}
        self.coupon: Optional[Coupon] = None

    def quantity_of(self, product: Product) -> int:
        return self._quantities.get(product, 0)

    def add(self, name: str, quantity: int = 1) -> None:
        product = self.inventory.find_product(name)
        if product is None:
            raise UnknownProductError(f"Product {name} does not exist")

        new_quantity = self.quantity_of(product) + quantity
        if new_quantity <= 0:
            raise InvalidQuantityError(f"Quantity of {name} should be a positive number, got {new_quantity}")
        if new_quantity > MAX_QUANTITY:
            raise InvalidQuantityError(f"Quantity of {name} should be less or equal to {MAX_QUANTITY}, got {new_quantity}")

        self._quantities[product] = new_quantity
        logger.debug("cart add %s qty=%s (now %s)", name, quantity, new_quantity)

    def use(self, coupon_name: str) -> None:
        coupon = self.inventory.find_coupon(coupon_name)
        if coupon is None:
            raise UnknownCouponError(f"Coupon {coupon_name} does not exist")

        self.coupon = coupon
        logger.debug("cart uses coupon %s", coupon_name)

    def lines(self) -> List[CartLine]:
        return [
            CartLine(
                product=product,
                quantity=quantity,
                price=product.price * quantity,
                discount=product.promotion.discount(product.price, quantity),
            )
            for product, quantity in self._quantities.items()
        ]

    def total_without_coupon(self) -> Decimal:
        return sum((line.total for line in self.lines()), ZERO)

    def coupon_discount(self) -> Decimal:
        if self.coupon is None:
            return ZERO
        return self.coupon.discount(self.total_without_coupon())

    def total(self) -> Decimal:
        return self.total_without_coupon() - self.coupon_discount()

    def invoice(self) -> str:
        return render_invoice(self)
