"""API router aggregation."""

from fastapi import APIRouter

from roster_match.api.health import router as health_router
from roster_match.api.imports import router as imports_router

api_router = APIRouter()
api_router.include_router(health_router)
# Import preview and matching endpoints
api_router.include_router(imports_router)
