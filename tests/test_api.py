"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API endpoints.

==============================================================================
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.core import exceptions
from storefront.core.exceptions import register_exception_handlers


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check returns status without touching the catalog."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["catalog_source"] == "fake"

    def test_deep_health_check(self, client: TestClient):
        """Test deep health check reports available products."""
        response = client.get("/api/health", params={"deep": True})
        assert response.status_code == 200
        data = response.json()
        assert data["components"]["catalog"] == "healthy"
        assert data["details"]["products_available"] == 3

    def test_deep_health_check_degraded(self, client: TestClient, catalog_source):
        """Test deep health check when the catalog cannot be fetched."""
        catalog_source.fail = True
        response = client.get("/api/health", params={"deep": True})
        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestProductEndpoints:
    """Tests for the catalog proxy route."""

    def test_list_products(self, client: TestClient):
        """Test products are returned as a JSON array."""
        response = client.get("/api/products")
        assert response.status_code == 200
        data = response.json()
        assert isinstance(data, list)
        assert [p["id"] for p in data] == ["1", "2", "3"]

    def test_product_fields(self, client: TestClient):
        """Test every product carries the catalog fields."""
        response = client.get("/api/products")
        first = response.json()[0]
        assert set(first) == {
            "id", "name", "slug", "price", "description", "category", "stock", "image"
        }
        assert first["price"] == 99.99
        assert first["category"] == "Electronics"
        assert first["stock"] == 10

    def test_fetch_failure_returns_500(self, client: TestClient, catalog_source):
        """Test query failure is surfaced with a generic error."""
        catalog_source.fail = True
        response = client.get("/api/products")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch products"}

    def test_each_request_queries_source(self, client: TestClient, catalog_source):
        """Test the route proxies every request to the source."""
        client.get("/api/products")
        client.get("/api/products")
        assert catalog_source.calls == 2

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
    def test_other_methods_not_allowed(self, client: TestClient, method: str):
        """Test non-GET methods are rejected with an Allow header."""
        response = client.request(method, "/api/products")
        assert response.status_code == 405
        assert response.headers["allow"] == "GET"
        assert response.text == f"Method {method} Not Allowed"


class TestRootEndpoint:
    """Tests for the storefront page."""

    def test_root_redirects_to_page(self, client: TestClient):
        response = client.get("/", follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == "/static/index.html"

    def test_page_is_served(self, client: TestClient):
        response = client.get("/static/index.html")
        assert response.status_code == 200
        assert "/ws/storefront" in response.text

    def test_page_buttons_use_data_attributes(self, client: TestClient):
        """Test product ids are passed through data attributes, not inline handlers."""
        page = client.get("/static/index.html").text
        assert "onclick=" not in page
        assert 'data-id="${esc(p.id)}"' in page
        assert '"\'": "&#39;"' in page


class TestExceptionHandlers:
    """Tests for the AppException JSON error envelope."""

    @pytest.fixture
    def error_client(self) -> TestClient:
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/sold-out")
        async def sold_out():
            raise exceptions.out_of_stock("3")

        @app.get("/unknown")
        async def unknown():
            raise exceptions.product_not_found()

        return TestClient(app)

    def test_app_exception_envelope(self, error_client: TestClient):
        response = error_client.get("/sold-out")
        assert response.status_code == 409

        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "OUT_OF_STOCK"
        assert body["error"]["details"] == {"product_id": "3"}
        assert "timestamp" in body["error"]

    def test_details_omitted_when_empty(self, error_client: TestClient):
        response = error_client.get("/unknown")
        assert response.status_code == 404
        assert "details" not in response.json()["error"]
