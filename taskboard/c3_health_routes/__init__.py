"""Health check routes."""

from taskboard.c3_health_routes.health_routes import router

__all__ = ["router"]
