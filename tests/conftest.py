"""Pytest fixtures for the checkout engine (tea shop catalog)."""

import pytest

from checkout.cart import Cart
from checkout.inventory import Inventory


@pytest.fixture
def inventory() -> Inventory:
    inventory = Inventory()

    inventory.register("Green Tea", "0.79", {"get_one_free": 3})
    inventory.register("Red Tea", "3.49", {"package": {5: 20}})
    inventory.register("Earl Grey", "0.99", {"threshold": {10: 2}})
    inventory.register("Black Coffee", "1.99")  # No promotion

    inventory.register_coupon("TEATIME", {"percent": 20})
    inventory.register_coupon("FIVEOFF", {"amount": "5.00"})
    inventory.register_coupon("BIGOFF", {"amount": "100.00"})

    return inventory


@pytest.fixture
def cart(inventory: Inventory) -> Cart:
    return inventory.new_cart()
