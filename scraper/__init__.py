"""
Extraction core: turns scraped video-site HTML into validated records.
"""

from .cleaner import clean_video, clean_candidates
from .config import ScraperConfig
from .dedupe import dedupe_exact, dedupe_strict
from .models import (
    DetailRecord,
    DetailsPage,
    ExtractionStats,
    PageMetadata,
    PaginationInfo,
    SearchPage,
    VideoRecord,
)
from .pipeline import details_page, search_page
from .utils import canonical_path, escape_for_cdn

__all__ = [
    'ScraperConfig',
    'VideoRecord',
    'DetailRecord',
    'PageMetadata',
    'PaginationInfo',
    'ExtractionStats',
    'SearchPage',
    'DetailsPage',
    'search_page',
    'details_page',
    'clean_video',
    'clean_candidates',
    'dedupe_exact',
    'dedupe_strict',
    'canonical_path',
    'escape_for_cdn',
]
