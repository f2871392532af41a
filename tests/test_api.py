"""
Tests for the utility API (mesob.main)
"""

import re

import pytest
from fastapi.testclient import TestClient

from mesob.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:

    def test_root(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == "/health"

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "operational"


class TestDeliveryEstimate:

    def test_same_point(self, client: TestClient) -> None:
        response = client.post(
            "/api/utils/delivery-estimate",
            json={
                "origin_lat": 40.7128,
                "origin_lng": -74.0060,
                "dest_lat": 40.7128,
                "dest_lng": -74.0060,
                "preparation_minutes": 20,
            },
        )
        assert response.status_code == 200
        assert response.json() == {
            "distance_meters": 0.0,
            "travel_minutes": 0,
            "preparation_minutes": 20,
            "total_minutes": 20,
            "formatted_distance": "0 m",
        }

    def test_default_preparation(self, client: TestClient) -> None:
        response = client.post(
            "/api/utils/delivery-estimate",
            json={"origin_lat": 0, "origin_lng": 0, "dest_lat": 0.01, "dest_lng": 0},
        )
        data = response.json()
        assert response.status_code == 200
        assert data["preparation_minutes"] == 15
        # 0.01 degrees of latitude is about 1112 m: 3 minutes at 500 m/min
        assert data["travel_minutes"] == 3
        assert data["formatted_distance"] == "1.1 km"

    def test_missing_coordinates(self, client: TestClient) -> None:
        response = client.post("/api/utils/delivery-estimate", json={"origin_lat": 1})
        assert response.status_code == 422

    def test_negative_preparation_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/utils/delivery-estimate",
            json={
                "origin_lat": 0,
                "origin_lng": 0,
                "dest_lat": 0,
                "dest_lng": 0,
                "preparation_minutes": -5,
            },
        )
        assert response.status_code == 422


class TestIdentifiers:

    def test_order_number(self, client: TestClient) -> None:
        response = client.post("/api/utils/order-number")
        assert response.status_code == 200
        assert re.match(r"^ORD-\d{8}-[A-Z0-9]{6}$", response.json()["order_number"])

    def test_slug(self, client: TestClient) -> None:
        response = client.post("/api/utils/slug", json={"text": "Hello, World!"})
        assert response.status_code == 200
        assert response.json() == {"slug": "hello-world"}


class TestValidate:

    def test_mixed_fields(self, client: TestClient) -> None:
        response = client.post(
            "/api/utils/validate",
            json={
                "email": "john@example.com",
                "phone": "555-123-4567",
                "password": "Abcdef12",
                "object_id": "507f1f77bcf86cd799439011",
            },
        )
        data = response.json()
        assert response.status_code == 200
        assert data["email"] is True
        assert data["phone"] is False
        assert data["password"] == {"is_valid": True, "message": "Password is valid"}
        assert data["object_id"] is True
        assert data["all_valid"] is False

    def test_omitted_fields_are_not_checked(self, client: TestClient) -> None:
        response = client.post("/api/utils/validate", json={"email": "john@example.com"})
        data = response.json()
        assert data["phone"] is None
        assert data["password"] is None
        assert data["all_valid"] is True

    def test_weak_password(self, client: TestClient) -> None:
        response = client.post("/api/utils/validate", json={"password": "abc"})
        data = response.json()
        assert data["password"]["is_valid"] is False
        assert data["all_valid"] is False


class TestLoyalty:

    def test_tier(self, client: TestClient) -> None:
        response = client.get("/api/utils/loyalty/1000")
        assert response.status_code == 200
        assert response.json() == {
            "lifetime_points": 1000,
            "tier": "silver",
            "next_tier": "gold",
            "points_to_next_tier": 500,
            "progress": 50.0,
        }

    def test_negative_points_rejected(self, client: TestClient) -> None:
        assert client.get("/api/utils/loyalty/-1").status_code == 422
