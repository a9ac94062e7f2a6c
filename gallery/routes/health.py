"""Health check endpoints for monitoring."""
from fastapi import APIRouter

from gallery.main_config import get_fastapi_config

router = APIRouter(
    prefix="/api",
    tags=["health"],
)


@router.get("/")
async def root():
    """API root endpoint."""
    config = get_fastapi_config()
    return {
        "message": config.title,
        "version": config.version,
        "docs": config.docs_url,
    }


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
