"""FastAPI application entry point."""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.core.config import settings
from backend.app.core.logging_config import get_logger, setup_logging
from backend.app.api.router import api_router
from backend.app.services.upstream import close_client

setup_logging(settings.log_level)
logger = get_logger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.api_version}


@app.get("/")
async def index():
    """Describe the API."""
    return {
        "message": "Search API with pagination and video details",
        "endpoints": {
            "search": "/api/v1/search/{query}/{page}",
            "details": "/api/v1/details/{path}",
            "health": "/api/health",
            "examples": [
                "Search: /api/v1/search/indian/1, /api/v1/search/indian/2",
                "Details: /api/v1/details/videos/fun-for-birthday-party-excuses-xhKaU3h",
            ],
        },
        "response_format": {
            "search": {
                "results": "Array of video objects with all essential fields",
                "pagination": "currentPage, totalPages, hasNext, hasPrevious, requestedPage",
                "stats": "found, unique, complete, duplicatesRemoved, filteredOut",
            },
            "details": {
                "detail": "Video metadata and details",
                "metadata": "Open Graph and Twitter card values",
                "streamUrl": "Direct video stream URL (HLS/MP4) or null",
                "related": "Array of related videos",
                "stats": "Counts for related videos and the extraction method used",
            },
        },
        "notes": [
            "Only returns videos with complete data and /videos/ URLs",
            "pagePath uses the short format: videos/video-slug-id",
            "Page parameter is optional, defaults to 1",
            f"Thumbnail URLs from {settings.cdn_host} are escaped for CDN compatibility",
        ],
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to log all errors."""
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__}
    )


app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    print("=" * 60)
    print(f"{settings.app_name} v{settings.api_version}")
    print("=" * 60)
    print(f"✓ CORS origins: {settings.cors_origins_list}")
    print(f"✓ Source site:  {settings.source_base_url}")
    print(f"✓ Timeouts:     search {settings.search_timeout:g}s, details {settings.details_timeout:g}s")
    base_url = f"http://{settings.host}:{settings.port}"
    print("-" * 60)
    print(f"📚 API Docs:    {base_url}/docs")
    print(f"💓 Health:      {base_url}/api/health")
    print("=" * 60)


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    print("\nShutting down...")
    await close_client()
    print("✓ Stopped")
