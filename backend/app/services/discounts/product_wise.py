from decimal import Decimal

from app.schemas.cart import Cart, CartItem, UpdatedCart
from app.schemas.coupon import DiscountKind, ProductWiseDetails
from app.services.discounts.base import (
    ZERO,
    Applicable,
    Evaluation,
    NotApplicable,
    build_updated_cart,
    round_money,
)


def _find_item(details: ProductWiseDetails, cart: Cart) -> int | None:
    for index, item in enumerate(cart.items):
        if item.product_id == details.product_id:
            return index
    return None


def _discount_for(details: ProductWiseDetails, item: CartItem) -> Evaluation:
    if details.min_quantity is not None and item.quantity < details.min_quantity:
        return NotApplicable(
            f"Product quantity {item.quantity} is below minimum required: {details.min_quantity}"
        )

    line_total = item.total_price
    if details.discount_kind == DiscountKind.PERCENTAGE:
        discount = line_total * details.discount / Decimal("100")
    else:
        discount = details.discount * item.quantity

    if details.max_discount is not None:
        discount = min(discount, details.max_discount)

    return Applicable(min(discount, line_total))


def evaluate(details: ProductWiseDetails, cart: Cart) -> Evaluation:
    index = _find_item(details, cart)
    if index is None:
        return NotApplicable(f"Product with ID {details.product_id} not found in cart")
    return _discount_for(details, cart.items[index])


def apply(details: ProductWiseDetails, cart: Cart) -> UpdatedCart | NotApplicable:
    result = evaluate(details, cart)
    if isinstance(result, NotApplicable):
        return result

    discount = round_money(result.amount)
    item_discounts = [ZERO] * len(cart.items)
    item_discounts[_find_item(details, cart)] = discount  # type: ignore[index]
    return build_updated_cart(cart, discount, item_discounts)
