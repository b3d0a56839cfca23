"""
Data models for the scraper.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LandingInfo:
    """Creator/landing page a video belongs to."""
    type: Optional[str] = None
    id: Optional[int] = None
    name: str = ""
    logo: str = ""
    link: str = ""


@dataclass
class VideoRecord:
    """A fully validated video. Only the cleaner builds these."""
    id: int
    title: str
    duration_seconds: int
    page_path: str
    thumbnail_url: str
    view_count: int
    created_at: Optional[int] = None
    video_type: str = "video"
    preview_thumbnail_url: str = ""
    high_res_image_url: str = ""
    sprite_url: str = ""
    trailer_url: str = ""
    trailer_fallback_url: str = ""
    landing_info: Optional[LandingInfo] = None
    is_custom_thumbnail: bool = False
    is_admin_custom_thumbnail: bool = False
    user_country: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)
    classes: str = ""


@dataclass
class AuthorInfo:
    """Uploader of a video on its detail page."""
    id: Optional[Any] = None
    name: str = ""
    page_path: str = ""
    verified: bool = False


@dataclass
class DetailRecord:
    """Single video from a detail page. Missing values are defaulted, not rejected."""
    id: Optional[int]
    title: str
    created_at: int
    duration_seconds: Optional[int] = None
    view_count: int = 0
    comment_count: int = 0
    rating_value: float = 0
    description: str = ""
    page_path: str = ""
    thumbnail_url: str = ""
    preview_thumbnail_url: str = ""
    sprite_url: str = ""
    trailer_url: str = ""
    download_url: str = ""
    is_vr: bool = False
    is_hd: bool = False
    is_fhd: bool = False
    is_uhd: bool = False
    author: Optional[AuthorInfo] = None


@dataclass
class PageMetadata:
    """Open Graph / Twitter card values of a page."""
    title: str = ""
    description: str = ""
    image: str = ""
    url: str = ""
    site_name: str = ""
    type: str = ""
    twitter_card: str = ""
    twitter_site: str = ""
    twitter_creator: str = ""
    canonical: str = ""
    amp_url: str = ""


@dataclass
class PaginationInfo:
    """Pagination controls of a search page."""
    current_page: int = 1
    total_pages: int = 1
    has_next: bool = False
    has_previous: bool = False


@dataclass
class ExtractionStats:
    """
    Counts for one extraction run.

    found = unique + duplicates_removed and unique = complete + filtered_out.
    """
    found: int = 0
    unique: int = 0
    complete: int = 0
    duplicates_removed: int = 0
    filtered_out: int = 0
    rejected: int = 0
    method: str = "none"

    @classmethod
    def from_counts(cls, found: int, unique: int, complete: int,
                    rejected: int = 0, method: str = "none") -> "ExtractionStats":
        return cls(
            found=found,
            unique=unique,
            complete=complete,
            duplicates_removed=found - unique,
            filtered_out=unique - complete,
            rejected=rejected,
            method=method,
        )


@dataclass
class SearchPage:
    """Result of extracting a search results page."""
    results: List[VideoRecord]
    pagination: PaginationInfo
    requested_page: int
    stats: ExtractionStats


@dataclass
class DetailsPage:
    """Result of extracting a video detail page."""
    detail: DetailRecord
    metadata: PageMetadata
    stream_url: Optional[str]
    related: List[VideoRecord]
    stats: ExtractionStats
