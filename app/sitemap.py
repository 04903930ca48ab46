"""Proxy the generated sitemap from the upstream API.

The upstream response is validated before it is handed to CDNs with a one
hour cache lifetime, so a truncated or corrupt sitemap is never cached.
"""

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=3600, s-maxage=3600"
DEFAULT_CONTENT_TYPE = "application/xml"
DEFAULT_TIMEOUT_S = 90.0
MIN_SITEMAP_BYTES = 500


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class SitemapError(Exception):
    """Base error; carries the HTTP status and message returned to the client."""

    status_code = 502
    message = "Failed to fetch sitemap"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(SitemapError):
    status_code = 500

    def __init__(self, setting: str):
        super().__init__(f"{setting} not configured")


class UpstreamError(SitemapError):
    """Upstream answered with a non-2xx status; that status is passed through."""

    def __init__(self, status_code: int):
        super().__init__(status_code=status_code)


class SitemapTimeoutError(SitemapError):
    pass


class NetworkError(SitemapError):
    pass


class DecompressionError(SitemapError):
    message = "Sitemap decompression failed"


class TruncatedPayloadError(SitemapError):
    message = "Sitemap from API was empty or truncated"


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------


class SitemapResult(BaseModel):
    status_code: int = 200
    body: bytes
    headers: dict[str, str]


async def _get(
    url: str,
    host: str,
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport],
) -> httpx.Response:
    # Status is checked before the body is read so a failing upstream keeps
    # its own status even when its body is not valid gzip.
    headers = {"Host": host, "Accept-Encoding": "gzip, identity"}
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(timeout), transport=transport, follow_redirects=True
    ) as client:
        resp = await client.send(client.build_request("GET", url, headers=headers), stream=True)
        try:
            if not resp.is_success:
                logger.warning("Sitemap proxy: upstream returned %s", resp.status_code)
                raise UpstreamError(resp.status_code)
            await resp.aread()
        finally:
            await resp.aclose()
        return resp


async def fetch_sitemap(
    api_base_url: str,
    host: Optional[str],
    *,
    default_host: str = "bowlingalleys.io",
    timeout: float = DEFAULT_TIMEOUT_S,
    min_bytes: int = MIN_SITEMAP_BYTES,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SitemapResult:
    """Fetch ``{api_base_url}/sitemap.xml`` and validate it.

    Raises a :class:`SitemapError` subclass for every failure mode; callers
    turn it into a JSON error response.
    """
    if not api_base_url:
        raise ConfigurationError("API_BASE_URL")

    url = f"{api_base_url.rstrip('/')}/sitemap.xml"

    try:
        resp = await asyncio.wait_for(
            _get(url, host or default_host, timeout, transport), timeout
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        logger.error("Sitemap proxy: timed out after %ss fetching %s", timeout, url)
        raise SitemapTimeoutError() from e
    except httpx.DecodingError as e:
        logger.error("Sitemap proxy: decompression failed: %s", e)
        raise DecompressionError() from e
    except httpx.HTTPError as e:
        logger.error("Sitemap proxy error: %s", e)
        raise NetworkError() from e

    body = resp.content
    if len(body) < min_bytes:
        logger.error("Sitemap proxy: API returned too few bytes (%d)", len(body))
        raise TruncatedPayloadError()

    return SitemapResult(
        body=body,
        headers={
            "Content-Type": resp.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
            "Cache-Control": CACHE_CONTROL,
        },
    )
