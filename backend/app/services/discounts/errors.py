"""Errors raised by the discount engine and the coupon service."""


class CouponError(ValueError):
    """Base class for coupon failures that carry a user-facing message."""


class CouponNotApplicableError(CouponError):
    """The cart does not meet the coupon's conditions."""


class InvalidCouponError(CouponError):
    """The coupon is inactive or expired."""


class InvalidCouponConfigurationError(CouponError):
    """The coupon's configuration document does not match its type."""


class CouponNotFoundError(CouponError):
    def __init__(self, coupon_id: int):
        super().__init__(f"Coupon {coupon_id} not found")
        self.coupon_id = coupon_id


class DuplicateCouponCodeError(CouponError):
    def __init__(self, code: str):
        super().__init__(f"Coupon with code '{code}' already exists")
        self.code = code
