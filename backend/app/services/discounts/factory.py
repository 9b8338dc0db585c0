from app.models.coupon import CouponType
from app.services.discounts import bxgy, cart_wise, product_wise
from app.services.discounts.base import DiscountStrategy

_STRATEGIES: dict[CouponType, DiscountStrategy] = {
    CouponType.CART_WISE: DiscountStrategy(evaluate=cart_wise.evaluate, apply=cart_wise.apply),
    CouponType.PRODUCT_WISE: DiscountStrategy(
        evaluate=product_wise.evaluate, apply=product_wise.apply
    ),
    CouponType.BXGY: DiscountStrategy(evaluate=bxgy.evaluate, apply=bxgy.apply),
}


def get_discount_strategy(coupon_type: CouponType) -> DiscountStrategy:
    return _STRATEGIES[coupon_type]
