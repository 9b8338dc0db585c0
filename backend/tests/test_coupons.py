"""Tests for the coupon CRUD endpoints and the coupon repository."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from app.main import app
from app.models.coupon import CouponType
from app.repositories.coupon_repository import CouponRepository
from app.schemas.coupon import CouponCreate, CouponUpdate


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


def coupon_payload(code="SAVE10", **overrides):
    payload = {
        "code": code,
        "type": "cart_wise",
        "description": "10% off carts over 100",
        "details": {"threshold": 100, "discount": 10},
    }
    payload.update(overrides)
    return payload


class TestCouponSchemas:
    def test_create_accepts_type_alias(self):
        data = CouponCreate.model_validate(coupon_payload())
        assert data.coupon_type == CouponType.CART_WISE
        assert data.is_active is True

    def test_create_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            CouponCreate.model_validate(coupon_payload(type="seasonal"))

    def test_create_rejects_empty_code(self):
        with pytest.raises(ValidationError):
            CouponCreate.model_validate(coupon_payload(code=""))

    def test_update_tracks_set_fields(self):
        data = CouponUpdate(description=None)
        assert data.model_dump(exclude_unset=True) == {"description": None}


class TestCouponRepository:
    def test_get_all_filters(self, db_session):
        repo = CouponRepository(db_session)
        repo.create(CouponCreate.model_validate(coupon_payload("A")))
        repo.create(CouponCreate.model_validate(coupon_payload("B", is_active=False)))
        repo.create(
            CouponCreate.model_validate(
                coupon_payload("C", type="product_wise", details={"productId": 1, "discount": 5})
            )
        )

        assert [c.code for c in repo.get_all()] == ["A", "B", "C"]
        assert [c.code for c in repo.get_all(coupon_type=CouponType.CART_WISE)] == ["A", "B"]
        assert [c.code for c in repo.get_all(is_active=True)] == ["A", "C"]
        assert [c.code for c in repo.get_all(skip=1, limit=1)] == ["B"]
        assert repo.count() == 3

    def test_get_all_valid(self, db_session):
        repo = CouponRepository(db_session)
        now = datetime(2026, 3, 1, tzinfo=UTC)
        repo.create(CouponCreate.model_validate(coupon_payload("OPEN")))
        repo.create(
            CouponCreate.model_validate(
                coupon_payload("EXPIRED", expiration_date=now - timedelta(hours=1))
            )
        )
        repo.create(
            CouponCreate.model_validate(
                coupon_payload("FUTURE", expiration_date=now + timedelta(hours=1))
            )
        )
        repo.create(CouponCreate.model_validate(coupon_payload("OFF", is_active=False)))

        assert [c.code for c in repo.get_all_valid(now)] == ["OPEN", "FUTURE"]

    def test_update_skips_clearing_required_fields(self, db_session):
        repo = CouponRepository(db_session)
        coupon = repo.create(CouponCreate.model_validate(coupon_payload()))

        updated = repo.update(coupon.id, CouponUpdate(code=None, is_active=None, description=None))

        assert updated.code == "SAVE10"
        assert updated.is_active is True
        assert updated.description is None

    def test_update_and_delete_missing(self, db_session):
        repo = CouponRepository(db_session)
        assert repo.update(999, CouponUpdate(is_active=False)) is None
        assert repo.delete(999) is False


class TestCreateCouponAPI:
    def test_create(self, client):
        response = client.post("/coupons/", json=coupon_payload())
        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["code"] == "SAVE10"
        assert data["type"] == "cart_wise"
        assert data["details"] == {"threshold": 100, "discount": 10}
        assert data["is_active"] is True
        assert data["expiration_date"] is None

    def test_create_bxgy(self, client):
        details = {
            "buyProducts": [{"productId": 1, "quantity": 3}],
            "getProducts": [{"productId": 3, "quantity": 1}],
            "repetitionLimit": 2,
        }
        response = client.post("/coupons/", json=coupon_payload("B3G1", type="bxgy", details=details))
        assert response.status_code == 201
        assert response.json()["details"] == details

    def test_create_with_expiration(self, client):
        response = client.post(
            "/coupons/", json=coupon_payload(expiration_date="2026-12-31T23:59:59Z")
        )
        assert response.status_code == 201
        assert response.json()["expiration_date"].startswith("2026-12-31T23:59:59")

    def test_duplicate_code(self, client):
        client.post("/coupons/", json=coupon_payload())
        response = client.post("/coupons/", json=coupon_payload())
        assert response.status_code == 409
        assert response.json()["detail"] == "Coupon with code 'SAVE10' already exists"

    def test_invalid_details(self, client):
        response = client.post(
            "/coupons/", json=coupon_payload(details={"threshold": 100, "discount": 10, "x": 1})
        )
        assert response.status_code == 422
        assert "Invalid details for a cart_wise coupon" in response.json()["detail"]

    def test_invalid_bxgy_details(self, client):
        details = {
            "buyProducts": [{"productId": 1, "quantity": 0}],
            "getProducts": [{"productId": 3, "quantity": 1}],
        }
        response = client.post("/coupons/", json=coupon_payload(type="bxgy", details=details))
        assert response.status_code == 422

    def test_unknown_type(self, client):
        response = client.post("/coupons/", json=coupon_payload(type="seasonal"))
        assert response.status_code == 422

    def test_missing_details(self, client):
        payload = coupon_payload()
        del payload["details"]
        response = client.post("/coupons/", json=payload)
        assert response.status_code == 422


class TestListCouponsAPI:
    def test_list_empty(self, client):
        response = client.get("/coupons/")
        assert response.status_code == 200
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "0"

    def test_list_in_creation_order(self, client):
        for code in ("FIRST", "SECOND", "THIRD"):
            client.post("/coupons/", json=coupon_payload(code))
        response = client.get("/coupons/")
        assert [c["code"] for c in response.json()] == ["FIRST", "SECOND", "THIRD"]
        assert response.headers["X-Total-Count"] == "3"

    def test_list_pagination(self, client):
        for code in ("A", "B", "C"):
            client.post("/coupons/", json=coupon_payload(code))
        response = client.get("/coupons/?skip=1&limit=1")
        assert [c["code"] for c in response.json()] == ["B"]
        assert response.headers["X-Total-Count"] == "3"

    def test_list_order_by(self, client):
        for code in ("BRAVO", "ALPHA", "CHARLIE"):
            client.post("/coupons/", json=coupon_payload(code))
        response = client.get("/coupons/?order_by=code:desc")
        assert [c["code"] for c in response.json()] == ["CHARLIE", "BRAVO", "ALPHA"]

    def test_list_unknown_order_by_falls_back_to_id(self, client):
        for code in ("BRAVO", "ALPHA"):
            client.post("/coupons/", json=coupon_payload(code))
        response = client.get("/coupons/?order_by=details:asc")
        assert [c["code"] for c in response.json()] == ["BRAVO", "ALPHA"]

    def test_list_filters(self, client):
        client.post("/coupons/", json=coupon_payload("CART"))
        client.post(
            "/coupons/",
            json=coupon_payload(
                "PROD", type="product_wise", details={"productId": 1, "discount": 5}
            ),
        )
        client.post("/coupons/", json=coupon_payload("OFF", is_active=False))

        by_type = client.get("/coupons/?type=product_wise").json()
        assert [c["code"] for c in by_type] == ["PROD"]
        active = client.get("/coupons/?is_active=true").json()
        assert [c["code"] for c in active] == ["CART", "PROD"]

    def test_list_invalid_limit(self, client):
        response = client.get("/coupons/?limit=0")
        assert response.status_code == 422


class TestCouponDetailAPI:
    def test_get(self, client):
        created = client.post("/coupons/", json=coupon_payload()).json()
        response = client.get(f"/coupons/{created['id']}")
        assert response.status_code == 200
        assert response.json()["code"] == "SAVE10"

    def test_get_not_found(self, client):
        response = client.get("/coupons/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Coupon 999 not found"

    def test_update(self, client):
        created = client.post("/coupons/", json=coupon_payload()).json()
        response = client.put(
            f"/coupons/{created['id']}",
            json={"description": "Updated", "details": {"threshold": 50, "discount": 15}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["description"] == "Updated"
        assert data["details"] == {"threshold": 50, "discount": 15}
        assert data["code"] == "SAVE10"
        assert data["type"] == "cart_wise"

    def test_update_deactivate(self, client):
        created = client.post("/coupons/", json=coupon_payload()).json()
        response = client.put(f"/coupons/{created['id']}", json={"is_active": False})
        assert response.status_code == 200
        assert response.json()["is_active"] is False

    def test_update_invalid_details(self, client):
        created = client.post("/coupons/", json=coupon_payload()).json()
        response = client.put(
            f"/coupons/{created['id']}", json={"details": {"productId": 2, "discount": 5}}
        )
        assert response.status_code == 422

    def test_update_duplicate_code(self, client):
        client.post("/coupons/", json=coupon_payload("TAKEN"))
        created = client.post("/coupons/", json=coupon_payload("MINE")).json()
        response = client.put(f"/coupons/{created['id']}", json={"code": "TAKEN"})
        assert response.status_code == 409

    def test_update_not_found(self, client):
        response = client.put("/coupons/999", json={"description": "x"})
        assert response.status_code == 404

    def test_delete(self, client):
        created = client.post("/coupons/", json=coupon_payload()).json()
        response = client.delete(f"/coupons/{created['id']}")
        assert response.status_code == 204
        assert client.get(f"/coupons/{created['id']}").status_code == 404

    def test_delete_not_found(self, client):
        response = client.delete("/coupons/999")
        assert response.status_code == 404
