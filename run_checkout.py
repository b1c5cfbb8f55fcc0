from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from checkout.errors import CheckoutError
from checkout.inventory import Inventory

logger = logging.getLogger("run_checkout")


def seed(inventory: Inventory) -> None:
    inventory.register("Green Tea", "0.79", {"get_one_free": 3})
    inventory.register("Red Tea", "3.49", {"package": {5: 20}})
    inventory.register("Earl Grey", "0.99", {"threshold": {10: 2}})
    inventory.register("Black Coffee", "1.99")

    inventory.register_coupon("TEATIME", {"percent": 20})
    inventory.register_coupon("FIVEOFF", {"amount": "5.00"})


def parse_item(value: str) -> Tuple[str, int]:
    """``"Green Tea:8"`` -> ``("Green Tea", 8)``; the quantity defaults to 1."""
    name, sep, qty = value.rpartition(":")
    if not sep:
        return value, 1
    try:
        return name, int(qty)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid quantity in {value!r}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fill one cart from the demo catalog and print its invoice.")
    p.add_argument("--add", dest="items", type=parse_item, action="append", default=[], metavar="NAME[:QTY]")
    p.add_argument("--coupon", type=str, default=None)
    p.add_argument("--verbose", action="store_true", help="Log cart operations (DEBUG)")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    inventory = Inventory()
    seed(inventory)

    cart = inventory.new_cart()
    try:
        for name, qty in args.items:
            cart.add(name, qty)
        if args.coupon:
            cart.use(args.coupon)
    except CheckoutError as e:
        logger.error("checkout failed: %s", e)
        return 1

    print(cart.invoice(), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
