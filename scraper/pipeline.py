"""
The two page-level operations: search results and video details.

Both take raw HTML and return plain dataclasses; fetching the page is the
caller's job.
"""

from typing import Callable, List, Optional, Sequence, Tuple

from .cleaner import is_complete
from .config import ScraperConfig
from .dedupe import dedupe_exact, dedupe_strict
from .details import extract_stream_url, extract_video_details
from .models import DetailsPage, ExtractionStats, SearchPage, VideoRecord
from .observer import Observer, notify
from .page_info import extract_metadata, extract_pagination
from .strategies import (
    RELATED_STRATEGIES,
    SEARCH_STRATEGIES,
    CascadeResult,
    run_cascade,
)


def extract_search_results(
    html: str,
    config: Optional[ScraperConfig] = None,
    observer: Optional[Observer] = None,
) -> CascadeResult:
    """Valid search result records, before deduplication."""
    return run_cascade(SEARCH_STRATEGIES, html, config, observer)


def extract_related_videos(
    html: str,
    config: Optional[ScraperConfig] = None,
    observer: Optional[Observer] = None,
) -> CascadeResult:
    """Valid related-video records, before deduplication."""
    return run_cascade(RELATED_STRATEGIES, html, config, observer)


def finalize(
    result: CascadeResult,
    dedupe: Callable[..., List[VideoRecord]],
    observer: Optional[Observer] = None,
) -> Tuple[List[VideoRecord], ExtractionStats]:
    """Deduplicate, apply the completeness gate and count each step."""
    found: Sequence[VideoRecord] = result.records
    unique = dedupe(found, observer)
    complete = [record for record in unique if is_complete(record)]
    stats = ExtractionStats.from_counts(
        found=len(found),
        unique=len(unique),
        complete=len(complete),
        rejected=result.rejected,
        method=result.method,
    )
    notify(observer, 'collection_finalized', found=stats.found, unique=stats.unique,
           complete=stats.complete, method=stats.method)
    return complete, stats


def search_page(
    html: str,
    requested_page: int = 1,
    config: Optional[ScraperConfig] = None,
    observer: Optional[Observer] = None,
) -> SearchPage:
    """
    Extract a search results page.

    An empty result list is a valid outcome, never an error.
    """
    config = config or ScraperConfig()
    result = extract_search_results(html, config, observer)
    results, stats = finalize(result, dedupe_strict, observer)
    return SearchPage(
        results=results,
        pagination=extract_pagination(html, observer),
        requested_page=requested_page,
        stats=stats,
    )


def details_page(
    html: str,
    config: Optional[ScraperConfig] = None,
    observer: Optional[Observer] = None,
) -> Optional[DetailsPage]:
    """
    Extract a video detail page with its related videos.

    Returns:
        DetailsPage, or None when the page does not describe a video
    """
    config = config or ScraperConfig()
    detail = extract_video_details(html, config, observer)
    if detail is None:
        return None

    result = extract_related_videos(html, config, observer)
    related, stats = finalize(result, dedupe_exact, observer)
    return DetailsPage(
        detail=detail,
        metadata=extract_metadata(html, config, observer),
        stream_url=extract_stream_url(html),
        related=related,
        stats=stats,
    )
