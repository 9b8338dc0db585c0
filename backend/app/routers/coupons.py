"""Coupon API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.coupon import Coupon, CouponType
from app.repositories.coupon_repository import CouponRepository
from app.schemas.coupon import CouponCreate, CouponResponse, CouponUpdate
from app.services.coupon_service import CouponService
from app.services.discounts.errors import (
    CouponNotFoundError,
    DuplicateCouponCodeError,
    InvalidCouponConfigurationError,
)

router = APIRouter()


@router.post(
    "/",
    response_model=CouponResponse,
    status_code=201,
    summary="Create coupon",
    responses={
        409: {"description": "Coupon with this code already exists"},
        422: {"description": "Validation error or invalid coupon details"},
    },
)
async def create_coupon(
    data: CouponCreate,
    db: Session = Depends(get_db),
) -> Coupon:
    """Create a new coupon."""
    service = CouponService(db)
    try:
        return service.create_coupon(data)
    except DuplicateCouponCodeError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    except InvalidCouponConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None


@router.get(
    "/",
    response_model=list[CouponResponse],
    summary="List coupons",
)
async def list_coupons(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    type: CouponType | None = Query(default=None),
    is_active: bool | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[Coupon]:
    """List coupons with optional type and activity filters."""
    repo = CouponRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(
        skip=skip,
        limit=limit,
        order_by=order_by,
        coupon_type=type,
        is_active=is_active,
    )


@router.get(
    "/{coupon_id}",
    response_model=CouponResponse,
    summary="Get coupon",
    responses={404: {"description": "Coupon not found"}},
)
async def get_coupon(
    coupon_id: int,
    db: Session = Depends(get_db),
) -> Coupon:
    """Get a coupon by ID."""
    service = CouponService(db)
    try:
        return service.get_coupon(coupon_id)
    except CouponNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.put(
    "/{coupon_id}",
    response_model=CouponResponse,
    summary="Update coupon",
    responses={
        404: {"description": "Coupon not found"},
        409: {"description": "Coupon with this code already exists"},
        422: {"description": "Validation error or invalid coupon details"},
    },
)
async def update_coupon(
    coupon_id: int,
    data: CouponUpdate,
    db: Session = Depends(get_db),
) -> Coupon:
    """Update a coupon by ID."""
    service = CouponService(db)
    try:
        return service.update_coupon(coupon_id, data)
    except CouponNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except DuplicateCouponCodeError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    except InvalidCouponConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None


@router.delete(
    "/{coupon_id}",
    status_code=204,
    summary="Delete coupon",
    responses={404: {"description": "Coupon not found"}},
)
async def delete_coupon(
    coupon_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Delete a coupon by ID."""
    service = CouponService(db)
    try:
        service.delete_coupon(coupon_id)
    except CouponNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
