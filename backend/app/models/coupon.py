"""Coupon model for cart promotions."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, func

from app.core.database import Base


class CouponType(str, Enum):
    CART_WISE = "cart_wise"
    PRODUCT_WISE = "product_wise"
    BXGY = "bxgy"


class Coupon(Base):
    """A stored coupon definition.

    ``details`` holds the per-type configuration document exactly as it was
    submitted; it is parsed into typed settings when the coupon is loaded
    for evaluation.
    """

    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), unique=True, index=True, nullable=False)
    coupon_type = Column(String(20), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    details = Column(JSON, nullable=False)

    expiration_date = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
