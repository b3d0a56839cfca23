"""Video details routes."""
from fastapi import APIRouter, HTTPException

from backend.app.schemas import DetailsResponse
from backend.app.services import scrape_service
from backend.app.services.scrape_service import (
    InvalidVideoPathError,
    UpstreamFetchError,
    UpstreamNotFoundError,
    VideoNotFoundError,
)

router = APIRouter(prefix="/details", tags=["details"])


@router.get("/{path:path}", response_model=DetailsResponse)
async def get_details(path: str):
    """
    Get video details, page metadata, stream URL and related videos.
    Path must look like videos/<slug>.
    """
    try:
        result = await scrape_service.get_video_details(path)
    except InvalidVideoPathError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamNotFoundError:
        raise HTTPException(status_code=404, detail="Video not found")
    except VideoNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UpstreamFetchError as e:
        raise HTTPException(status_code=502, detail=f"Failed to fetch video details: {e}")
    return DetailsResponse.from_page(result)
