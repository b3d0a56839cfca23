"""Main API router - aggregates all route modules."""
from fastapi import APIRouter

from backend.app.api.routes import search, details

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(search.router)
api_router.include_router(details.router)
