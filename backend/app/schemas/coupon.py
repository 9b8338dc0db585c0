"""Coupon schemas and the typed per-type configuration documents."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from app.models.coupon import CouponType


class DiscountKind(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


class _CouponDetails(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    @field_validator("discount_kind", mode="before", check_fields=False)
    @classmethod
    def _normalize_kind(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class CartWiseDetails(_CouponDetails):
    threshold: Decimal = Field(ge=0)
    discount: Decimal = Field(ge=0)
    discount_kind: DiscountKind = Field(
        default=DiscountKind.PERCENTAGE,
        validation_alias=AliasChoices("discountKind", "discountType", "discount_kind"),
        serialization_alias="discountKind",
    )
    min_item_count: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("minItemCount", "minItems", "min_item_count"),
        serialization_alias="minItemCount",
    )
    max_discount: Decimal | None = Field(default=None, ge=0, alias="maxDiscount")


class ProductWiseDetails(_CouponDetails):
    product_id: int = Field(alias="productId")
    discount: Decimal = Field(ge=0)
    discount_kind: DiscountKind = Field(
        default=DiscountKind.PERCENTAGE,
        validation_alias=AliasChoices("discountKind", "discountType", "discount_kind"),
        serialization_alias="discountKind",
    )
    min_quantity: int | None = Field(default=None, ge=0, alias="minQuantity")
    max_discount: Decimal | None = Field(default=None, ge=0, alias="maxDiscount")


class ProductQuantity(_CouponDetails):
    product_id: int = Field(alias="productId")
    quantity: int = Field(ge=0)


class BxGyDetails(_CouponDetails):
    buy_products: list[ProductQuantity] = Field(alias="buyProducts", min_length=1)
    get_products: list[ProductQuantity] = Field(alias="getProducts", min_length=1)
    repetition_limit: int = Field(default=1, ge=0, alias="repetitionLimit")

    @field_validator("buy_products")
    @classmethod
    def _require_buy_quantity(cls, value: list[ProductQuantity]) -> list[ProductQuantity]:
        if sum(p.quantity for p in value) <= 0:
            raise ValueError("buyProducts must require at least one unit")
        return value

    @property
    def required_buy_quantity(self) -> int:
        return sum(p.quantity for p in self.buy_products)

    @property
    def free_quantity_per_repetition(self) -> int:
        return sum(p.quantity for p in self.get_products)


CouponDetails = CartWiseDetails | ProductWiseDetails | BxGyDetails

DETAILS_MODELS: dict[CouponType, type[_CouponDetails]] = {
    CouponType.CART_WISE: CartWiseDetails,
    CouponType.PRODUCT_WISE: ProductWiseDetails,
    CouponType.BXGY: BxGyDetails,
}


class CouponCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(min_length=1, max_length=50)
    coupon_type: CouponType = Field(alias="type")
    description: str | None = Field(default=None, max_length=500)
    details: dict[str, Any]
    expiration_date: datetime | None = None
    is_active: bool = True


class CouponUpdate(BaseModel):
    code: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    details: dict[str, Any] | None = None
    expiration_date: datetime | None = None
    is_active: bool | None = None


class CouponResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    coupon_type: CouponType = Field(serialization_alias="type")
    description: str | None = None
    details: dict[str, Any]
    expiration_date: datetime | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
