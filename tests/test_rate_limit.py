"""Tests for rate limiting and client IP extraction (radiometa/core/rate_limit.py)."""

import json
from unittest.mock import MagicMock, patch

import pytest

from radiometa.core.rate_limit import (
    _get_trusted_proxies,
    _is_trusted_proxy,
    get_client_ip,
    limiter,
    rate_limit_exceeded_handler,
)


@pytest.fixture(autouse=True)
def _clear_cache():
    """Clear the lru_cache between tests so each test controls its own config."""
    _get_trusted_proxies.cache_clear()
    yield
    _get_trusted_proxies.cache_clear()


def _make_settings(trusted_proxies: str):
    settings = MagicMock()
    settings.trusted_proxies = trusted_proxies
    return settings


def _make_request(*, client_host: str = "10.0.0.1", headers: dict | None = None):
    request = MagicMock()
    request.client = MagicMock()
    request.client.host = client_host
    request.headers = headers or {}
    return request


class TestTrustedProxies:
    @patch("radiometa.core.rate_limit.get_settings")
    def test_exact_and_cidr_entries(self, mock_settings):
        mock_settings.return_value = _make_settings("127.0.0.1, 10.0.0.0/8,")

        assert _is_trusted_proxy("127.0.0.1") is True
        assert _is_trusted_proxy("10.1.2.3") is True
        assert _is_trusted_proxy("192.168.1.1") is False

    @patch("radiometa.core.rate_limit.get_settings")
    def test_invalid_ip_is_untrusted(self, mock_settings):
        mock_settings.return_value = _make_settings("10.0.0.0/8")

        assert _is_trusted_proxy("not-an-ip") is False


class TestGetClientIp:
    @patch("radiometa.core.rate_limit.get_settings")
    def test_direct_connection(self, mock_settings):
        mock_settings.return_value = _make_settings("127.0.0.1")
        request = _make_request(client_host="203.0.113.9", headers={"X-Real-IP": "1.2.3.4"})

        assert get_client_ip(request) == "203.0.113.9"

    @patch("radiometa.core.rate_limit.get_settings")
    def test_real_ip_from_trusted_proxy(self, mock_settings):
        mock_settings.return_value = _make_settings("127.0.0.1")
        request = _make_request(client_host="127.0.0.1", headers={"X-Real-IP": " 1.2.3.4 "})

        assert get_client_ip(request) == "1.2.3.4"

    @patch("radiometa.core.rate_limit.get_settings")
    def test_forwarded_for_from_trusted_proxy(self, mock_settings):
        mock_settings.return_value = _make_settings("127.0.0.1")
        request = _make_request(
            client_host="127.0.0.1", headers={"X-Forwarded-For": "5.6.7.8, 127.0.0.1"}
        )

        assert get_client_ip(request) == "5.6.7.8"


class TestRateLimitExceededHandler:
    def test_returns_429_with_retry_after(self):
        response = rate_limit_exceeded_handler(MagicMock(), MagicMock())

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"
        body = json.loads(response.body)
        assert body["error"].startswith("Rate limit exceeded")

    def test_over_limit_request_gets_429_with_cors_headers(self, client):
        limited = MagicMock(stream_metadata_rate_limit_per_minute=1)
        was_enabled = limiter.enabled
        limiter.reset()
        limiter.enabled = True
        try:
            with patch("radiometa.api.stream_metadata.settings", limited):
                first = client.get("/api/stream-metadata/xyz")
                second = client.get("/api/stream-metadata/xyz")
        finally:
            limiter.enabled = was_enabled
            limiter.reset()

        assert first.status_code == 404
        assert second.status_code == 429
        assert second.headers["retry-after"] == "60"
        assert second.headers["access-control-allow-origin"] == "*"
