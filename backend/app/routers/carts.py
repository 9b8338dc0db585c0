"""Cart discount endpoints: applicable coupons and coupon application."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.cart import ApplicableCouponsResponse, ApplyCouponResponse, CartRequest
from app.services.coupon_service import CouponService
from app.services.discounts.errors import (
    CouponNotApplicableError,
    CouponNotFoundError,
    InvalidCouponConfigurationError,
    InvalidCouponError,
)

router = APIRouter()


@router.post(
    "/applicable-coupons",
    response_model=ApplicableCouponsResponse,
    summary="List applicable coupons",
    responses={500: {"description": "A stored coupon has invalid details"}},
)
async def get_applicable_coupons(
    data: CartRequest,
    db: Session = Depends(get_db),
) -> ApplicableCouponsResponse:
    """Find every valid coupon that discounts the given cart."""
    service = CouponService(db)
    try:
        coupons = service.get_applicable_coupons(data.cart)
    except InvalidCouponConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e)) from None
    return ApplicableCouponsResponse(applicable_coupons=coupons)


@router.post(
    "/apply-coupon/{coupon_id}",
    response_model=ApplyCouponResponse,
    summary="Apply coupon to cart",
    responses={
        400: {"description": "Coupon is inactive, expired or not applicable"},
        404: {"description": "Coupon not found"},
        500: {"description": "The coupon has invalid details"},
    },
)
async def apply_coupon(
    coupon_id: int,
    data: CartRequest,
    db: Session = Depends(get_db),
) -> ApplyCouponResponse:
    """Apply a coupon to the cart and return the itemized discounts."""
    service = CouponService(db)
    try:
        updated_cart = service.apply_coupon(coupon_id, data.cart)
    except CouponNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except (InvalidCouponError, CouponNotApplicableError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except InvalidCouponConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e)) from None
    return ApplyCouponResponse(updated_cart=updated_cart)
