"""Pydantic schemas."""
from backend.app.schemas.video import (
    VideoItem,
    LandingResponse,
    VideoDetailResponse,
    AuthorResponse,
    PageMetadataResponse,
    PaginationResponse,
    StatsResponse,
    SearchResponse,
    DetailsResponse,
)

__all__ = [
    "VideoItem",
    "LandingResponse",
    "VideoDetailResponse",
    "AuthorResponse",
    "PageMetadataResponse",
    "PaginationResponse",
    "StatsResponse",
    "SearchResponse",
    "DetailsResponse",
]
