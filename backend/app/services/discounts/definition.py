"""Typed view of a stored coupon, as consumed by the discount engine."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from app.models.coupon import Coupon, CouponType
from app.models.shared import as_utc, utc_now
from app.schemas.coupon import DETAILS_MODELS, CouponDetails
from app.services.discounts.errors import InvalidCouponConfigurationError


def parse_coupon_details(coupon_type: CouponType | str, details: Any) -> CouponDetails:
    """Validate a configuration document against the schema for its type.

    Raises:
        InvalidCouponConfigurationError: If the type is unknown, the document
            is not an object, or a field is missing, unknown or mistyped.
    """
    try:
        coupon_type = CouponType(coupon_type)
    except ValueError:
        raise InvalidCouponConfigurationError(f"Unknown coupon type '{coupon_type}'") from None

    if not isinstance(details, dict):
        raise InvalidCouponConfigurationError(
            f"Details for a {coupon_type.value} coupon must be an object"
        )

    try:
        return DETAILS_MODELS[coupon_type].model_validate(details)  # type: ignore[return-value]
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'details'}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidCouponConfigurationError(
            f"Invalid details for a {coupon_type.value} coupon: {problems}"
        ) from None


@dataclass(frozen=True)
class CouponDefinition:
    id: int
    code: str
    coupon_type: CouponType
    details: CouponDetails
    description: str | None = None
    expiration_date: datetime | None = None
    is_active: bool = True

    @classmethod
    def from_model(cls, coupon: Coupon) -> "CouponDefinition":
        details = parse_coupon_details(coupon.coupon_type, coupon.details)  # type: ignore[arg-type]
        return cls(
            id=coupon.id,  # type: ignore[arg-type]
            code=coupon.code,  # type: ignore[arg-type]
            coupon_type=CouponType(coupon.coupon_type),
            details=details,
            description=coupon.description,  # type: ignore[arg-type]
            expiration_date=coupon.expiration_date,  # type: ignore[arg-type]
            is_active=bool(coupon.is_active),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expiration_date is None:
            return False
        return (now or utc_now()) >= as_utc(self.expiration_date)

    def is_valid(self, now: datetime | None = None) -> bool:
        return self.is_active and not self.is_expired(now)
