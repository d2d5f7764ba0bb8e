"""
Health check API endpoints
"""

from fastapi import APIRouter

from image_toolkit.core.config import settings
from image_toolkit.presentation.api.v1.schemas.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint that returns service status
    """
    return HealthResponse(status="healthy", version=settings.api_version, root=settings.root)


@router.get("/")
async def root():
    """
    Root endpoint
    """
    return {"message": "Image Toolkit API is running", "status": "healthy"}
