"""Coupon evaluation across the three coupon families.

Pure functions over a cart and already-loaded coupon definitions: nothing
here touches the database, so callers decide where coupons come from.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from app.schemas.cart import ApplicableCoupon, Cart, UpdatedCart
from app.services.discounts.base import NotApplicable, round_money
from app.services.discounts.definition import CouponDefinition
from app.services.discounts.errors import CouponNotApplicableError, InvalidCouponError
from app.services.discounts.factory import get_discount_strategy

logger = logging.getLogger(__name__)


def list_applicable_coupons(
    coupons: Iterable[CouponDefinition],
    cart: Cart,
) -> list[ApplicableCoupon]:
    """Return the coupons that give this cart a positive discount.

    Coupons are expected to be pre-filtered to valid ones. The result keeps
    the input order. Configuration errors are not caught here.
    """
    applicable: list[ApplicableCoupon] = []

    for coupon in coupons:
        result = get_discount_strategy(coupon.coupon_type).evaluate(coupon.details, cart)
        if isinstance(result, NotApplicable):
            logger.debug("Coupon %s not applicable: %s", coupon.code, result.reason)
            continue

        discount = round_money(result.amount)
        if discount <= 0:
            logger.debug("Coupon %s gives no discount", coupon.code)
            continue

        applicable.append(
            ApplicableCoupon(
                coupon_id=coupon.id,
                code=coupon.code,
                type=coupon.coupon_type,
                discount=discount,
                description=coupon.description,
            )
        )

    return applicable


def apply_coupon(
    coupon: CouponDefinition,
    cart: Cart,
    now: datetime | None = None,
) -> UpdatedCart:
    """Apply one coupon and return the itemized cart.

    Raises:
        InvalidCouponError: If the coupon is inactive or expired.
        CouponNotApplicableError: If the cart does not meet its conditions.
    """
    if not coupon.is_valid(now):
        raise InvalidCouponError("Coupon is either inactive or expired")

    result = get_discount_strategy(coupon.coupon_type).apply(coupon.details, cart)
    if isinstance(result, NotApplicable):
        raise CouponNotApplicableError(result.reason)

    logger.info(
        "Applied coupon %s: discount %s, final price %s",
        coupon.code,
        result.total_discount,
        result.final_price,
    )
    return result
