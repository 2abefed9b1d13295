"""Tests for application-level endpoints and middleware."""


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_endpoint(self, client):
        """Health check needs no token and reports the backend."""
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "sqlite"
        assert "timestamp" in data


class TestFrontend:
    """Tests for the bundled single-page frontend."""

    def test_index_served_at_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "/app.js" in response.text

    def test_script_served(self, client):
        response = client.get("/app.js")

        assert response.status_code == 200
        assert "/api" in response.text

    def test_low_stock_and_company_stats_shipped(self, client):
        script = client.get("/app.js").text
        page = client.get("/").text
        styles = client.get("/styles.css").text

        assert "LOW_STOCK_THRESHOLD = 10" in script
        assert "'low-stock'" in script
        assert ".low-stock" in styles
        assert 'id="stat-companies"' in page

    def test_api_routes_take_precedence(self, client):
        """API paths are not swallowed by the static mount."""
        response = client.get("/api/products")

        assert response.status_code == 401


class TestSecurityHeaders:
    """Tests for the security headers middleware."""

    def test_headers_present(self, client):
        response = client.get("/api/health")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"
        assert "strict-transport-security" not in response.headers


class TestCORS:
    """Tests for CORS configuration."""

    def test_cors_headers_present(self, client):
        """Test that CORS headers are present."""
        response = client.options(
            "/api/products",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            }
        )

        assert "access-control-allow-origin" in response.headers


class TestUnhandledErrors:
    """Tests for the global exception handler."""

    def test_unexpected_exception_returns_json_500(self, monkeypatch):
        from fastapi.testclient import TestClient

        from app.main import app

        def broken_backend():
            raise RuntimeError("connection pool exhausted")

        monkeypatch.setattr("app.main.database_backend", broken_backend)

        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.get("/api/health")

        assert response.status_code == 500
        data = response.json()
        assert data["detail"] == "Internal server error"
        assert data["error_type"] == "RuntimeError"
        assert len(data["error_id"]) == 12
        assert "connection pool exhausted" not in response.text
