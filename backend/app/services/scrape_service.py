"""Search and details operations: build the source URL, fetch, extract."""
from scraper import DetailsPage, SearchPage, details_page, search_page
from scraper.observer import log_observer

from backend.app.core.config import settings
from backend.app.core.logging_config import get_logger
from backend.app.services.upstream import (
    UpstreamError,
    UpstreamFetchError,
    UpstreamNotFoundError,
    fetch_html,
)

logger = get_logger(__name__)

__all__ = [
    "ScrapeError",
    "InvalidVideoPathError",
    "VideoNotFoundError",
    "UpstreamError",
    "UpstreamFetchError",
    "UpstreamNotFoundError",
    "normalize_page",
    "search_videos",
    "get_video_details",
]

VIDEO_PATH_PREFIX = "videos/"


class ScrapeError(Exception):
    """Base class for request-level scraping failures."""


class InvalidVideoPathError(ScrapeError):
    """The requested path is not a video page path."""


class VideoNotFoundError(ScrapeError):
    """The page was fetched but no video could be extracted from it."""


def normalize_page(page) -> int:
    """Page numbers below 1 or non-numeric values fall back to 1."""
    try:
        number = int(page)
    except (TypeError, ValueError):
        return 1
    return number if number >= 1 else 1


async def search_videos(query: str, page: int = 1) -> SearchPage:
    """Fetch a search results page and extract it."""
    config = settings.scraper_config()
    page = normalize_page(page)
    url = config.search_url(query, page)

    html = await fetch_html(url, timeout=config.search_timeout)
    result = search_page(html, requested_page=page, config=config, observer=log_observer)

    stats = result.stats
    logger.info(
        "search_extracted", query=query, page=page, found=stats.found,
        unique=stats.unique, complete=stats.complete, method=stats.method,
    )
    return result


async def get_video_details(path: str) -> DetailsPage:
    """
    Fetch a video page and extract its details and related videos.

    Raises:
        InvalidVideoPathError: path does not start with videos/
        UpstreamNotFoundError: the source site has no such page
        UpstreamFetchError: the page could not be fetched
        VideoNotFoundError: the page had no extractable video
    """
    if not path or not path.startswith(VIDEO_PATH_PREFIX):
        raise InvalidVideoPathError("Invalid path. Must start with videos/")

    config = settings.scraper_config()
    html = await fetch_html(config.page_url(path), timeout=config.details_timeout)

    result = details_page(html, config=config, observer=log_observer)
    if result is None:
        raise VideoNotFoundError("Video details not found")

    stats = result.stats
    logger.info(
        "details_extracted", path=path, found=stats.found,
        unique=stats.unique, complete=stats.complete, method=stats.method,
    )
    return result
