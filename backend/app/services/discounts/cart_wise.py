from decimal import Decimal

from app.schemas.cart import Cart, UpdatedCart
from app.schemas.coupon import CartWiseDetails, DiscountKind
from app.services.discounts.base import (
    ZERO,
    Applicable,
    Evaluation,
    NotApplicable,
    build_updated_cart,
    round_money,
)


def evaluate(details: CartWiseDetails, cart: Cart) -> Evaluation:
    cart_total = cart.total_price

    if cart_total < details.threshold:
        return NotApplicable(f"Cart total {cart_total} is below threshold {details.threshold}")

    if details.min_item_count is not None and cart.total_items < details.min_item_count:
        return NotApplicable(
            f"Cart has {cart.total_items} items, minimum required: {details.min_item_count}"
        )

    if details.discount_kind == DiscountKind.PERCENTAGE:
        discount = cart_total * details.discount / Decimal("100")
    else:
        discount = details.discount

    if details.max_discount is not None:
        discount = min(discount, details.max_discount)

    return Applicable(min(discount, cart_total))


def apply(details: CartWiseDetails, cart: Cart) -> UpdatedCart | NotApplicable:
    result = evaluate(details, cart)
    if isinstance(result, NotApplicable):
        return result

    total_discount = round_money(result.amount)
    return build_updated_cart(cart, total_discount, _allocate(cart, total_discount))


def _allocate(cart: Cart, total_discount: Decimal) -> list[Decimal]:
    """Split the discount by each line's share of the cart total.

    Every line but the last is rounded on its own; the last one takes
    whatever is left so the lines always add up to ``total_discount``.
    """
    cart_total = cart.total_price
    if cart_total == 0:
        return [ZERO] * len(cart.items)

    allocations: list[Decimal] = []
    remaining = total_discount
    last = len(cart.items) - 1

    for index, item in enumerate(cart.items):
        if index == last:
            share = remaining
        else:
            share = round_money(item.total_price / cart_total * total_discount)
        allocations.append(share)
        remaining -= share

    return allocations
