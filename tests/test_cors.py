"""Tests for CORS and security headers.

The web player is served from other origins, so every response (errors
included) must carry the CORS headers and OPTIONS must never reach a route.
"""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from radiometa.core.security_headers import (
    CORS_ALLOW_METHODS,
    CorsHeadersMiddleware,
    SecurityHeadersMiddleware,
)
from radiometa.main import app
from radiometa.services.upstream import UpstreamFetchError


def _assert_cors_headers(response):
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type"


class TestCorsConfiguration:
    def test_cors_methods_cover_all_api_routes(self):
        """Every HTTP method used by a route must be in CORS_ALLOW_METHODS."""
        api_methods = set()
        for route in app.routes:
            if hasattr(route, "methods") and route.methods:
                api_methods.update(route.methods)

        for method in api_methods:
            if method == "HEAD":
                continue  # HEAD is implicitly handled
            assert method in CORS_ALLOW_METHODS, (
                f"HTTP {method} is used by API routes but missing from CORS_ALLOW_METHODS"
            )

    def test_middlewares_are_configured(self):
        classes = [m.cls for m in app.user_middleware]

        assert CorsHeadersMiddleware in classes
        assert SecurityHeadersMiddleware in classes


class TestCorsResponses:
    def test_preflight_returns_empty_200(self, client: TestClient):
        response = client.options(
            "/api/stream-metadata/web3",
            headers={"Origin": "https://web3radio.xyz", "Access-Control-Request-Method": "GET"},
        )

        assert response.status_code == 200
        assert response.content == b""
        _assert_cors_headers(response)

    def test_bare_options_without_origin(self, client: TestClient):
        response = client.options("/api/stream-metadata")

        assert response.status_code == 200
        assert response.content == b""

    def test_success_carries_cors_headers(self, client: TestClient):
        response = client.get("/api/stream-metadata")

        _assert_cors_headers(response)

    def test_not_found_carries_cors_headers(self, client: TestClient):
        response = client.get("/api/stream-metadata/xyz")

        assert response.status_code == 404
        _assert_cors_headers(response)

    @patch("radiometa.services.stream_metadata.fetch_upstream", new_callable=AsyncMock)
    def test_upstream_error_carries_cors_headers(self, mock_fetch, client: TestClient):
        mock_fetch.side_effect = UpstreamFetchError("HTTP 502: Bad Gateway", 502)

        response = client.get("/api/stream-metadata/web3")

        assert response.status_code == 500
        _assert_cors_headers(response)

    @patch("radiometa.api.stream_metadata.get_stream_metadata", new_callable=AsyncMock)
    def test_unhandled_error_carries_cors_headers(self, mock_get):
        mock_get.side_effect = RuntimeError("boom")

        with TestClient(app, raise_server_exceptions=False) as c:
            response = c.get("/api/stream-metadata/web3")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        _assert_cors_headers(response)


class TestSecurityHeaders:
    def test_headers_present(self, client: TestClient):
        response = client.get("/health")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "SAMEORIGIN"
        assert response.headers["cache-control"] == "no-store, max-age=0"

    def test_no_hsts_outside_production(self, client: TestClient):
        response = client.get("/health")

        assert "strict-transport-security" not in response.headers
