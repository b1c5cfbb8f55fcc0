from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List

from checkout.money import to_money

if TYPE_CHECKING:
    from checkout.cart import Cart

NAME_WIDTH = 44
QTY_WIDTH = 2
LABEL_WIDTH = 47
AMOUNT_WIDTH = 9

SEPARATOR = "+" + "-" * 48 + "+" + "-" * 10 + "+\n"
HEADER = "| Name                                       qty |    price |\n"


def _amount_cell(amount: Decimal) -> str:
    return f"{to_money(amount):{AMOUNT_WIDTH}.2f} |\n"


def _discount_cell(amount: Decimal) -> str:
    return f"{'-' + format(to_money(amount), '.2f'):>{AMOUNT_WIDTH}} |\n"


def product_row(name: str, quantity: int, price: Decimal) -> str:
    return f"| {name[:NAME_WIDTH]:<{NAME_WIDTH}}{quantity:>{QTY_WIDTH}} |" + _amount_cell(price)


def discount_row(label: str, discount: Decimal) -> str:
    return f"| {label[:LABEL_WIDTH]:<{LABEL_WIDTH}}|" + _discount_cell(discount)


def total_row(total: Decimal) -> str:
    return f"{'| TOTAL':<49}|" + _amount_cell(total)


def render_invoice(cart: Cart) -> str:
    """
    Render the cart as a fixed-width table.

    Every product row is followed by its promotion row when the promotion
    gives a nonzero discount. The coupon row, if any, comes after all
    products, then the total.
    """
    rows: List[str] = [SEPARATOR, HEADER, SEPARATOR]

    for line in cart.lines():
        rows.append(product_row(line.product.name, line.quantity, line.price))
        if line.discount:
            rows.append(discount_row(f"  ({line.product.promotion.description})", line.discount))

    if cart.coupon is not None:
        label = f"Coupon {cart.coupon.name} - {cart.coupon.description}"
        rows.append(discount_row(label, cart.coupon_discount()))

    rows += [SEPARATOR, total_row(cart.total()), SEPARATOR]
    return "".join(rows)
