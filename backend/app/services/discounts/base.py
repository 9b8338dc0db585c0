"""Shared building blocks for the discount strategies."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from app.schemas.cart import Cart, UpdatedCart, UpdatedCartItem

CENT = Decimal("0.01")
ZERO = Decimal("0")


def round_money(value: Decimal) -> Decimal:
    """Round half-up to two decimal places.

    Equivalent to scaling by 100, rounding to the nearest integer with
    halves going up and scaling back.
    """
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Applicable:
    amount: Decimal


@dataclass(frozen=True)
class NotApplicable:
    reason: str


Evaluation = Applicable | NotApplicable


@dataclass(frozen=True)
class DiscountStrategy:
    """The pair of functions implementing one coupon family.

    ``evaluate`` returns the unrounded discount or the reason the coupon
    does not apply. ``apply`` returns the itemized cart with every amount
    rounded, or the same ``NotApplicable`` outcome.
    """

    evaluate: Callable[[Any, Cart], Evaluation]
    apply: Callable[[Any, Cart], UpdatedCart | NotApplicable]


def build_updated_cart(
    cart: Cart,
    total_discount: Decimal,
    item_discounts: Sequence[Decimal],
) -> UpdatedCart:
    """Assemble the itemized result, one discount per cart item in order."""
    total_price = cart.total_price
    return UpdatedCart(
        items=[
            UpdatedCartItem(
                product_id=item.product_id,
                quantity=item.quantity,
                price=round_money(item.price),
                total_discount=round_money(discount),
            )
            for item, discount in zip(cart.items, item_discounts, strict=True)
        ],
        total_price=round_money(total_price),
        total_discount=round_money(total_discount),
        final_price=round_money(total_price - total_discount),
    )
