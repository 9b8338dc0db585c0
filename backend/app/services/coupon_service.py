"""Coupon management and cart discount service."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.models.coupon import Coupon
from app.models.shared import as_utc
from app.repositories.coupon_repository import CouponRepository
from app.schemas.cart import ApplicableCoupon, Cart, UpdatedCart
from app.schemas.coupon import CouponCreate, CouponUpdate
from app.services.discounts import engine
from app.services.discounts.definition import CouponDefinition, parse_coupon_details
from app.services.discounts.errors import (
    CouponNotFoundError,
    DuplicateCouponCodeError,
    InvalidCouponConfigurationError,
)

logger = logging.getLogger(__name__)


class CouponService:
    """Service for coupon CRUD and discount calculation against carts."""

    def __init__(self, db: Session):
        self.db = db
        self.coupon_repo = CouponRepository(db)

    def create_coupon(self, data: CouponCreate) -> Coupon:
        """Validate and store a new coupon.

        Raises:
            DuplicateCouponCodeError: If the code is already taken.
            InvalidCouponConfigurationError: If details do not fit the type.
        """
        logger.info("Creating coupon with code: %s", data.code)

        if self.coupon_repo.get_by_code(data.code):
            raise DuplicateCouponCodeError(data.code)

        parse_coupon_details(data.coupon_type, data.details)
        if data.expiration_date is not None:
            data = data.model_copy(update={"expiration_date": as_utc(data.expiration_date)})

        coupon = self.coupon_repo.create(data)
        logger.info("Coupon created successfully with id: %s", coupon.id)
        return coupon

    def get_coupon(self, coupon_id: int) -> Coupon:
        coupon = self.coupon_repo.get_by_id(coupon_id)
        if not coupon:
            raise CouponNotFoundError(coupon_id)
        return coupon

    def update_coupon(self, coupon_id: int, data: CouponUpdate) -> Coupon:
        """Apply a partial update.

        The coupon type is fixed at creation, so new details are validated
        against the stored type.
        """
        logger.info("Updating coupon with id: %s", coupon_id)
        coupon = self.get_coupon(coupon_id)

        if data.code is not None and data.code != coupon.code:
            if self.coupon_repo.get_by_code(data.code):
                raise DuplicateCouponCodeError(data.code)

        if data.details is not None:
            parse_coupon_details(coupon.coupon_type, data.details)  # type: ignore[arg-type]

        if data.expiration_date is not None:
            data = data.model_copy(update={"expiration_date": as_utc(data.expiration_date)})

        updated = self.coupon_repo.update(coupon_id, data)
        if not updated:
            raise CouponNotFoundError(coupon_id)
        logger.info("Coupon updated successfully with id: %s", coupon_id)
        return updated

    def delete_coupon(self, coupon_id: int) -> None:
        logger.info("Deleting coupon with id: %s", coupon_id)
        if not self.coupon_repo.delete(coupon_id):
            raise CouponNotFoundError(coupon_id)

    def get_applicable_coupons(self, cart: Cart, now: datetime | None = None) -> list[ApplicableCoupon]:
        """List every currently valid coupon that discounts this cart."""
        logger.info("Finding applicable coupons for cart with %d items", len(cart.items))

        definitions = [self._load(coupon) for coupon in self.coupon_repo.get_all_valid(now)]
        applicable = engine.list_applicable_coupons(definitions, cart)

        logger.info("Found %d applicable coupons", len(applicable))
        return applicable

    def apply_coupon(self, coupon_id: int, cart: Cart, now: datetime | None = None) -> UpdatedCart:
        """Apply a stored coupon to a cart.

        Raises:
            CouponNotFoundError: If no coupon has this id.
            InvalidCouponError: If the coupon is inactive or expired.
            CouponNotApplicableError: If the cart does not qualify.
        """
        logger.info("Applying coupon with id: %s", coupon_id)
        coupon = self.get_coupon(coupon_id)
        return engine.apply_coupon(self._load(coupon), cart, now)

    def _load(self, coupon: Coupon) -> CouponDefinition:
        try:
            return CouponDefinition.from_model(coupon)
        except InvalidCouponConfigurationError:
            logger.error("Stored coupon %s has invalid details", coupon.code)
            raise
