"""Buy-X-get-Y: qualifying purchases unlock free units of other products.

Buy quantities are pooled across every listed buy product, so "buy 2 of
A or B" is met by one A and one B. Each full bundle of buy units grants
one bundle of get units, up to ``repetitionLimit`` bundles per cart.

Free units are handed out cheapest item first. Changing that order
changes the discount whenever the get items have different prices.
"""

from collections import Counter
from dataclasses import dataclass
from decimal import Decimal

from app.schemas.cart import Cart, UpdatedCart
from app.schemas.coupon import BxGyDetails
from app.services.discounts.base import (
    ZERO,
    Applicable,
    Evaluation,
    NotApplicable,
    build_updated_cart,
    round_money,
)


@dataclass(frozen=True)
class FreeAllocation:
    repetitions: int
    free_quantity: int
    item_discounts: list[Decimal]
    # Cart indices in the order free units were handed out
    order: list[int]

    @property
    def total(self) -> Decimal:
        return sum(self.item_discounts, ZERO)


def _allocate(details: BxGyDetails, cart: Cart) -> FreeAllocation | NotApplicable:
    required = details.required_buy_quantity
    in_cart: Counter[int] = Counter()
    for item in cart.items:
        in_cart[item.product_id] += item.quantity

    available = sum(in_cart[product.product_id] for product in details.buy_products)
    if available < required:
        return NotApplicable(
            f"Insufficient buy products. Required: {required}, Available: {available}"
        )

    repetitions = min(available // required, details.repetition_limit)
    free_quantity = repetitions * details.free_quantity_per_repetition

    get_ids = {product.product_id for product in details.get_products}
    eligible = [index for index, item in enumerate(cart.items) if item.product_id in get_ids]
    if not eligible:
        return NotApplicable("None of the 'get' products are in the cart")

    item_discounts = [ZERO] * len(cart.items)
    order: list[int] = []
    remaining = free_quantity
    # sorted() is stable: equal prices keep cart order
    for index in sorted(eligible, key=lambda i: cart.items[i].price):
        if remaining <= 0:
            break
        item = cart.items[index]
        free_units = min(remaining, item.quantity)
        item_discounts[index] = item.price * free_units
        remaining -= free_units
        order.append(index)

    return FreeAllocation(
        repetitions=repetitions,
        free_quantity=free_quantity,
        item_discounts=item_discounts,
        order=order,
    )


def evaluate(details: BxGyDetails, cart: Cart) -> Evaluation:
    allocation = _allocate(details, cart)
    if isinstance(allocation, NotApplicable):
        return allocation
    return Applicable(allocation.total)


def apply(details: BxGyDetails, cart: Cart) -> UpdatedCart | NotApplicable:
    allocation = _allocate(details, cart)
    if isinstance(allocation, NotApplicable):
        return allocation

    # Round the running total rather than each line, so lines stay
    # non-negative and add up to the rounded total.
    item_discounts = [ZERO] * len(cart.items)
    running = ZERO
    allocated = ZERO
    for index in allocation.order:
        running += allocation.item_discounts[index]
        rounded = round_money(running)
        item_discounts[index] = rounded - allocated
        allocated = rounded

    return build_updated_cart(cart, round_money(allocation.total), item_discounts)
