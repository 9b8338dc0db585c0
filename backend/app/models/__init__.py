from app.models.coupon import Coupon, CouponType

__all__ = [
    "Coupon",
    "CouponType",
]
