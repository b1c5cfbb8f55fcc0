from __future__ import annotations


class CheckoutError(Exception):
    pass


# Catalog registration


class InvalidNameError(CheckoutError, ValueError):
    pass


class InvalidPriceError(CheckoutError, ValueError):
    pass


class DuplicateProductError(CheckoutError, ValueError):
    pass


class DuplicateCouponError(CheckoutError, ValueError):
    pass


class InvalidPromotionError(CheckoutError, ValueError):
    pass


class InvalidCouponError(CheckoutError, ValueError):
    pass


# Cart operations


class UnknownProductError(CheckoutError, LookupError):
    pass


class UnknownCouponError(CheckoutError, LookupError):
    pass


class InvalidQuantityError(CheckoutError, ValueError):
    pass
