"""
Recipe Service API Routes
Main router configuration for all API endpoints
"""

from fastapi import APIRouter
import structlog

from api.endpoints import recipes

logger = structlog.get_logger()

# Create main API router
api_router = APIRouter()

api_router.include_router(
    recipes.router,
    prefix="/recipes",
    tags=["recipes"]
)

logger.debug("API routes configured successfully")
