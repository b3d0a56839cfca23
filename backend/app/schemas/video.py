"""Video schemas."""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from scraper import DetailsPage, SearchPage


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON."""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class LandingResponse(CamelModel):
    """Creator/landing page of a video."""
    type: Optional[str] = None
    id: Optional[int] = None
    name: str = ""
    logo: str = ""
    link: str = ""


class VideoItem(CamelModel):
    """Validated video in search results and related lists."""
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
    landing_info: Optional[LandingResponse] = None
    is_custom_thumbnail: bool = False
    is_admin_custom_thumbnail: bool = False
    user_country: str = ""
    attributes: Dict[str, Any] = {}
    classes: Any = ""


class AuthorResponse(CamelModel):
    """Uploader of a video."""
    id: Optional[Any] = None
    name: str = ""
    page_path: str = ""
    verified: bool = False


class VideoDetailResponse(CamelModel):
    """Full video details."""
    id: Optional[int] = None
    title: str = ""
    duration_seconds: Optional[int] = None
    created_at: int
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
    is_vr: bool = Field(False, alias="isVR")
    is_hd: bool = Field(False, alias="isHD")
    is_fhd: bool = Field(False, alias="isFHD")
    is_uhd: bool = Field(False, alias="isUHD")
    author: Optional[AuthorResponse] = None


class PageMetadataResponse(CamelModel):
    """Open Graph / Twitter card values."""
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


class PaginationResponse(CamelModel):
    """Pagination of a search page."""
    current_page: int = 1
    total_pages: int = 1
    has_next: bool = False
    has_previous: bool = False
    requested_page: int = 1


class StatsResponse(CamelModel):
    """Extraction counts: found = unique + duplicatesRemoved, unique = complete + filteredOut."""
    found: int = 0
    unique: int = 0
    complete: int = 0
    duplicates_removed: int = 0
    filtered_out: int = 0
    rejected: int = 0
    method: str = "none"


class SearchResponse(CamelModel):
    """Search endpoint response."""
    results: List[VideoItem]
    pagination: PaginationResponse
    stats: StatsResponse

    @classmethod
    def from_page(cls, page: SearchPage) -> "SearchResponse":
        pagination = PaginationResponse.model_validate(page.pagination)
        pagination.requested_page = page.requested_page
        return cls(
            results=[VideoItem.model_validate(video) for video in page.results],
            pagination=pagination,
            stats=StatsResponse.model_validate(page.stats),
        )


class DetailsResponse(CamelModel):
    """Details endpoint response."""
    detail: VideoDetailResponse
    metadata: PageMetadataResponse
    stream_url: Optional[str] = None
    related: List[VideoItem]
    stats: StatsResponse

    @classmethod
    def from_page(cls, page: DetailsPage) -> "DetailsResponse":
        return cls(
            detail=VideoDetailResponse.model_validate(page.detail),
            metadata=PageMetadataResponse.model_validate(page.metadata),
            stream_url=page.stream_url,
            related=[VideoItem.model_validate(video) for video in page.related],
            stats=StatsResponse.model_validate(page.stats),
        )
