"""Search routes."""
from fastapi import APIRouter, HTTPException

from backend.app.schemas import SearchResponse
from backend.app.services import scrape_service
from backend.app.services.scrape_service import UpstreamError

router = APIRouter(prefix="/search", tags=["search"])


async def _search(query: str, page) -> SearchResponse:
    try:
        result = await scrape_service.search_videos(query, scrape_service.normalize_page(page))
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail=f"Failed to fetch search results: {e}")
    return SearchResponse.from_page(result)


@router.get("/{query}", response_model=SearchResponse)
async def search(query: str):
    """Search videos, first page."""
    return await _search(query, 1)


@router.get("/{query}/{page}", response_model=SearchResponse)
async def search_page(query: str, page: str):
    """Search videos on a given page. Non-numeric or non-positive pages mean page 1."""
    return await _search(query, page)
