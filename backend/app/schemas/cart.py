"""Cart payloads and discount results."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from app.models.coupon import CouponType

# Amounts are exact Decimals in Python and plain JSON numbers on the wire.
MoneyAmount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CartItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int
    quantity: int = Field(gt=0)
    price: Decimal = Field(ge=0)

    @property
    def total_price(self) -> Decimal:
        return self.price * self.quantity


class Cart(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: list[CartItem] = Field(min_length=1)

    @property
    def total_price(self) -> Decimal:
        return sum((item.total_price for item in self.items), Decimal("0"))

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)


class CartRequest(BaseModel):
    cart: Cart


class UpdatedCartItem(BaseModel):
    product_id: int
    quantity: int
    price: MoneyAmount
    total_discount: MoneyAmount


class UpdatedCart(BaseModel):
    items: list[UpdatedCartItem]
    total_price: MoneyAmount
    total_discount: MoneyAmount
    final_price: MoneyAmount


class ApplyCouponResponse(BaseModel):
    updated_cart: UpdatedCart


class ApplicableCoupon(BaseModel):
    coupon_id: int
    code: str
    type: CouponType
    discount: MoneyAmount
    description: str | None = None


class ApplicableCouponsResponse(BaseModel):
    applicable_coupons: list[ApplicableCoupon]
