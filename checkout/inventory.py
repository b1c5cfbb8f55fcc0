from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from checkout.cart import Cart
from checkout.coupons import Coupon, build_coupon
from checkout.errors import DuplicateCouponError, DuplicateProductError
from checkout.models import Product
from checkout.money import MoneyLike
from checkout.promotions import build_promotion

logger = logging.getLogger(__name__)


class Inventory:
    """
    In-memory catalog of products and coupons.

    The inventory is the only place products and coupons are created. Both
    registries are append-only and keep registration order, which is also
    the lookup order.
    """

    def __init__(self) -> None:
        self._products: List[Product] = []
        self._coupons: List[Coupon] = []

    @property
    def products(self) -> Tuple[Product, ...]:
        return tuple(self._products)

    @property
    def coupons(self) -> Tuple[Coupon, ...]:
        return tuple(self._coupons)

    def register(self, name: str, price: MoneyLike, promotion: Any = None) -> Product:
        if self.find_product(name) is not None:
            raise DuplicateProductError(f"Product {name} already exists")
        product = Product(name=name, price=price, promotion=build_promotion(promotion))

        self._products.append(product)
        logger.info("registered product %s price=%s promotion=%s", name, product.price, product.promotion)
        return product

    def register_coupon(self, name: str, spec: Any) -> Coupon:
        if self.find_coupon(name) is not None:
            raise DuplicateCouponError(f"Coupon {name} already exists")
        coupon = build_coupon(name, spec)

        self._coupons.append(coupon)
        logger.info("registered coupon %s (%s)", name, coupon.description)
        return coupon

    def find_product(self, name: str) -> Optional[Product]:
        return next((product for product in self._products if product.name == name), None)

    def find_coupon(self, name: str) -> Optional[Coupon]:
        return next((coupon for coupon in self._coupons if coupon.name == name), None)

    def new_cart(self) -> Cart:
        return Cart(self)
