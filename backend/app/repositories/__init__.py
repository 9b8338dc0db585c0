from app.repositories.coupon_repository import CouponRepository

__all__ = [
    "CouponRepository",
]
