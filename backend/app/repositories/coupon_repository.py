"""Coupon repository for data access."""

from datetime import datetime
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.sorting import apply_order_by
from app.models.coupon import Coupon, CouponType
from app.models.shared import utc_now
from app.schemas.coupon import CouponCreate, CouponUpdate

SORTABLE_FIELDS = ("id", "code", "coupon_type", "expiration_date", "created_at", "updated_at")

# Columns that cannot be cleared through a partial update
_REQUIRED_FIELDS = ("code", "details", "is_active")


class CouponRepository:
    """Repository for Coupon model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
        coupon_type: CouponType | None = None,
        is_active: bool | None = None,
    ) -> list[Coupon]:
        """Get coupons with optional filters, oldest first by default."""
        query = self.db.query(Coupon)

        if coupon_type:
            query = query.filter(Coupon.coupon_type == coupon_type.value)
        if is_active is not None:
            query = query.filter(Coupon.is_active == is_active)

        query = apply_order_by(query, Coupon, order_by, SORTABLE_FIELDS)
        return query.offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(Coupon).count()

    def get_by_id(self, coupon_id: int) -> Coupon | None:
        """Get a coupon by ID."""
        return self.db.query(Coupon).filter(Coupon.id == coupon_id).first()

    def get_by_code(self, code: str) -> Coupon | None:
        """Get a coupon by code."""
        return self.db.query(Coupon).filter(Coupon.code == code).first()

    def get_all_valid(self, now: datetime | None = None) -> list[Coupon]:
        """Get active coupons that have not expired, in creation order."""
        now = now or utc_now()
        return (
            self.db.query(Coupon)
            .filter(
                Coupon.is_active.is_(True),
                or_(Coupon.expiration_date.is_(None), Coupon.expiration_date > now),
            )
            .order_by(Coupon.id.asc())
            .all()
        )

    def create(self, data: CouponCreate) -> Coupon:
        """Create a new coupon."""
        coupon = Coupon(
            code=data.code,
            coupon_type=data.coupon_type.value,
            description=data.description,
            details=data.details,
            expiration_date=data.expiration_date,
            is_active=data.is_active,
        )
        self.db.add(coupon)
        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def update(self, coupon_id: int, data: CouponUpdate) -> Coupon | None:
        """Update the fields that were explicitly set."""
        coupon = self.get_by_id(coupon_id)
        if not coupon:
            return None

        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            if value is None and key in _REQUIRED_FIELDS:
                continue
            setattr(coupon, key, value)

        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def delete(self, coupon_id: int) -> bool:
        """Delete a coupon by ID."""
        coupon = self.get_by_id(coupon_id)
        if not coupon:
            return False

        self.db.delete(coupon)
        self.db.commit()
        return True
