from app.schemas.cart import (
    ApplicableCoupon,
    ApplicableCouponsResponse,
    ApplyCouponResponse,
    Cart,
    CartItem,
    CartRequest,
    UpdatedCart,
    UpdatedCartItem,
)
from app.schemas.coupon import (
    BxGyDetails,
    CartWiseDetails,
    CouponCreate,
    CouponDetails,
    CouponResponse,
    CouponUpdate,
    DiscountKind,
    ProductQuantity,
    ProductWiseDetails,
)

__all__ = [
    "ApplicableCoupon",
    "ApplicableCouponsResponse",
    "ApplyCouponResponse",
    "BxGyDetails",
    "Cart",
    "CartItem",
    "CartRequest",
    "CartWiseDetails",
    "CouponCreate",
    "CouponDetails",
    "CouponResponse",
    "CouponUpdate",
    "DiscountKind",
    "ProductQuantity",
    "ProductWiseDetails",
    "UpdatedCart",
    "UpdatedCartItem",
]
