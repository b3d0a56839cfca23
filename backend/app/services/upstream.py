"""Outbound HTML fetching from the source site."""
import httpx

from backend.app.core.config import settings
from backend.app.core.logging_config import get_logger

logger = get_logger(__name__)

# Persistent HTTP client
_client: httpx.AsyncClient | None = None


class UpstreamError(Exception):
    """The source page could not be fetched."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class UpstreamNotFoundError(UpstreamError):
    """The source site answered 404."""


class UpstreamFetchError(UpstreamError):
    """Timeout, network error or any other non-2xx answer."""


def get_client() -> httpx.AsyncClient:
    """Get or create persistent HTTP client with connection pooling."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.details_timeout, connect=10.0),
            follow_redirects=True,
            verify=True,
            limits=httpx.Limits(
                max_keepalive_connections=20,
                max_connections=100,
                keepalive_expiry=60.0,
            ),
            http2=True,
        )
    return _client


def set_client(client: httpx.AsyncClient | None) -> None:
    """Replace the shared client (tests use a MockTransport-backed one)."""
    global _client
    _client = client


async def close_client() -> None:
    """Close the shared client on shutdown."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None


def get_headers() -> dict:
    """Browser-like headers for upstream requests."""
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml",
    }


async def fetch_html(url: str, timeout: float) -> str:
    """
    Fetch a page and return its body.

    Raises:
        UpstreamNotFoundError: upstream answered 404
        UpstreamFetchError: timeout, network error or other non-2xx status
    """
    client = get_client()
    try:
        resp = await client.get(url, headers=get_headers(), timeout=timeout)
    except httpx.TimeoutException as e:
        raise UpstreamFetchError(url, f"Timed out after {timeout:g}s") from e
    except httpx.HTTPError as e:
        raise UpstreamFetchError(url, f"{type(e).__name__}: {e}") from e

    if resp.status_code == 404:
        raise UpstreamNotFoundError(url, "Upstream: 404", status_code=404)
    if not resp.is_success:
        raise UpstreamFetchError(url, f"Upstream: {resp.status_code}", status_code=resp.status_code)

    logger.debug("page_fetched", url=url, size=len(resp.content))
    return resp.text
