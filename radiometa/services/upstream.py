"""Fetch raw now-playing payloads from upstream radio-server status endpoints."""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Literal

import httpx

from radiometa.core.config import get_settings

logger = logging.getLogger(__name__)


class UpstreamFetchError(Exception):
    """The upstream status endpoint could not be reached or returned non-2xx."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class UpstreamBody:
    """A decoded upstream response.

    ``data`` holds the decoded JSON value for ``kind == "json"``; for text
    bodies it is ``{"raw": text}`` so dict-based parsers can still inspect it.
    ``text`` always holds the body as received.
    """

    kind: Literal["json", "text"]
    data: Any
    text: str = field(default="", repr=False)

    @classmethod
    def from_text(cls, text: str) -> "UpstreamBody":
        return cls(kind="text", data={"raw": text}, text=text)


def decode_body(text: str, content_type: str | None) -> UpstreamBody:
    """Decode a response body, tolerating mislabelled JSON.

    Several upstreams serve JSON as text/html or without a Content-Type, so
    the text is always given a JSON parse attempt before falling back to raw.
    """
    if content_type and "application/json" in content_type.lower():
        try:
            return UpstreamBody(kind="json", data=json.loads(text), text=text)
        except ValueError:
            logger.debug("Body labelled %s is not valid JSON; keeping raw text", content_type)
            return UpstreamBody.from_text(text)

    try:
        return UpstreamBody(kind="json", data=json.loads(text), text=text)
    except ValueError:
        return UpstreamBody.from_text(text)


async def fetch_upstream(url: str) -> UpstreamBody:
    """GET an upstream status endpoint once (no retries).

    The configured timeout caps the whole call, body included, so an upstream
    that trickles bytes (subscribe-style endpoints) cannot hold the request open.

    Raises UpstreamFetchError on network errors, timeouts and non-2xx responses.
    """
    settings = get_settings()
    headers = {
        "Accept": "application/json",
        "User-Agent": settings.upstream_user_agent,
    }

    async with httpx.AsyncClient(
        timeout=settings.upstream_timeout_seconds, follow_redirects=True
    ) as client:
        try:
            async with asyncio.timeout(settings.upstream_timeout_seconds):
                response = await client.get(url, headers=headers)
        except (httpx.TimeoutException, TimeoutError) as e:
            logger.warning("Upstream timeout for %s: %s", url, e)
            raise UpstreamFetchError(
                f"Upstream timed out after {settings.upstream_timeout_seconds:g}s"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Upstream request failed for %s: %s", url, e)
            raise UpstreamFetchError(str(e) or type(e).__name__) from e

    if not response.is_success:
        logger.warning("Upstream %s returned HTTP %d", url, response.status_code)
        raise UpstreamFetchError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
        )

    return decode_body(response.text, response.headers.get("content-type"))
