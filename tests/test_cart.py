"""Tests for cart quantities, coupons and totals."""
import logging
from decimal import Decimal

import pytest

from checkout.errors import InvalidQuantityError, UnknownCouponError, UnknownProductError
from checkout.inventory import Inventory


def test_add_defaults_to_one(inventory, cart):
    """Test that add without a quantity adds one unit."""
    cart.add("Black Coffee")
    assert cart.quantity_of(inventory.find_product("Black Coffee")) == 1


def test_add_accumulates(inventory, cart):
    """Test that repeated adds of one product accumulate into one line."""
    cart.add("Red Tea", 3)
    cart.add("Red Tea", 4)
    assert cart.quantity_of(inventory.find_product("Red Tea")) == 7
    assert len(cart.lines()) == 1


def test_quantity_of_missing_product_is_zero(inventory, cart):
    """Test that a product not in the cart has quantity 0."""
    assert cart.quantity_of(inventory.find_product("Earl Grey")) == 0


def test_add_unknown_product(cart):
    """Test that adding an unregistered product fails and leaves the cart empty."""
    with pytest.raises(UnknownProductError):
        cart.add("Matcha")
    assert cart.lines() == []


@pytest.mark.parametrize("first, second", [(99, 1), (50, 50), (1, -1), (5, -10)])
def test_add_rejects_out_of_range_and_keeps_quantity(inventory, cart, first, second):
    """Test that an add leaving [1, 99] is rejected without changing the quantity."""
    cart.add("Green Tea", first)
    with pytest.raises(InvalidQuantityError):
        cart.add("Green Tea", second)
    assert cart.quantity_of(inventory.find_product("Green Tea")) == first


@pytest.mark.parametrize("quantity", [0, -1, 100])
def test_add_rejects_invalid_first_quantity(inventory, cart, quantity):
    """Test that a first add outside [1, 99] creates no line."""
    with pytest.raises(InvalidQuantityError):
        cart.add("Green Tea", quantity)
    assert cart.quantity_of(inventory.find_product("Green Tea")) == 0
    assert cart.lines() == []


def test_add_negative_quantity_within_range(inventory, cart):
    """Test that a negative add is allowed while the result stays positive."""
    cart.add("Green Tea", 10)
    cart.add("Green Tea", -4)
    assert cart.quantity_of(inventory.find_product("Green Tea")) == 6


def test_add_up_to_99(inventory, cart):
    """Test that 99 units is the largest accepted quantity."""
    cart.add("Earl Grey", 99)
    assert cart.quantity_of(inventory.find_product("Earl Grey")) == 99


def test_empty_cart_totals(cart):
    """Test that an empty cart totals 0.00."""
    assert cart.total_without_coupon() == Decimal("0.00")
    assert cart.total() == Decimal("0.00")


def test_total_without_promotions(cart):
    """Test total of a product without promotion."""
    cart.add("Black Coffee", 3)
    assert cart.total() == Decimal("5.97")


def test_total_applies_promotions(cart):
    """Test that every line's promotion is subtracted from the subtotal."""
    cart.add("Green Tea", 8)   # 6.32 - 1.58
    cart.add("Red Tea", 10)    # 34.90 - 6.98
    cart.add("Earl Grey", 20)  # 19.80 - 0.20
    assert cart.total_without_coupon() == Decimal("52.26")
    assert cart.total() == Decimal("52.26")


def test_total_does_not_depend_on_add_order(inventory):
    """Test that the total is the same whatever order products are added in."""
    first = inventory.new_cart()
    second = inventory.new_cart()
    for name, qty in [("Green Tea", 8), ("Red Tea", 10), ("Earl Grey", 20)]:
        first.add(name, qty)
    for name, qty in [("Earl Grey", 20), ("Red Tea", 10), ("Green Tea", 8)]:
        second.add(name, qty)
    assert first.total() == second.total()


def test_percent_coupon(cart):
    """Test percent coupon applied to the post-promotion subtotal."""
    cart.add("Green Tea", 8)
    cart.add("Red Tea", 10)
    cart.add("Earl Grey", 20)
    cart.use("TEATIME")
    assert cart.coupon_discount() == Decimal("10.45")
    assert cart.total() == Decimal("41.81")


def test_amount_coupon_never_exceeds_subtotal():
    """Test that an amount coupon larger than the subtotal brings the total to 0.00."""
    inventory = Inventory()
    inventory.register("Tea", "5.00")
    inventory.register_coupon("TEN", {"amount": "10.00"})
    cart = inventory.new_cart()
    cart.add("Tea")
    cart.use("TEN")

    assert cart.coupon_discount() == Decimal("5.00")
    assert cart.total() == Decimal("0.00")


def test_total_matches_coupon_discount_of_subtotal(cart):
    """Test that total equals subtotal minus the coupon discount of the subtotal."""
    cart.add("Red Tea", 7)
    cart.add("Earl Grey", 13)
    assert cart.total() == cart.total_without_coupon()

    cart.use("FIVEOFF")
    subtotal = cart.total_without_coupon()
    assert cart.total() == subtotal - cart.coupon.discount(subtotal)


def test_last_coupon_wins(inventory, cart):
    """Test that a second use replaces the first coupon."""
    cart.add("Black Coffee", 10)
    cart.use("TEATIME")
    cart.use("FIVEOFF")
    assert cart.coupon is inventory.find_coupon("FIVEOFF")
    assert cart.total() == Decimal("14.90")


def test_use_unknown_coupon_keeps_previous(inventory, cart):
    """Test that an unknown coupon fails and keeps the selected one."""
    cart.use("TEATIME")
    with pytest.raises(UnknownCouponError):
        cart.use("NOPE")
    assert cart.coupon is inventory.find_coupon("TEATIME")


def test_lines_follow_insertion_order(cart):
    """Test line order, price, discount and total per line."""
    cart.add("Earl Grey", 2)
    cart.add("Green Tea", 3)
    cart.add("Earl Grey", 1)
    lines = cart.lines()
    assert [(line.product.name, line.quantity) for line in lines] == [("Earl Grey", 3), ("Green Tea", 3)]
    assert lines[1].price == Decimal("2.37")
    assert lines[1].discount == Decimal("0.79")
    assert lines[1].total == Decimal("1.58")


def test_cart_logs_mutations(cart, caplog):
    """Test that add and use are logged at DEBUG."""
    with caplog.at_level(logging.DEBUG, logger="checkout.cart"):
        cart.add("Green Tea", 2)
        cart.use("TEATIME")
    assert "cart add Green Tea qty=2 (now 2)" in caplog.text
    assert "cart uses coupon TEATIME" in caplog.text
