"""Health check routes for the Taskboard API."""

from datetime import datetime, timezone
from fastapi import APIRouter

from taskboard import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Health check endpoint.

    Returns:
        dict: Health status, timestamp, and version
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }
