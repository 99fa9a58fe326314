"""Authentication routes."""

from taskboard.c3_auth_routes.auth_routes import create_auth_router

__all__ = ["create_auth_router"]
