"""
Health check endpoint.
"""

from fastapi import APIRouter

from writeassist import __version__

router = APIRouter()


@router.get("/api/health")
async def health_check() -> dict:
    """Basic health check."""
    return {"status": "healthy", "version": __version__}
