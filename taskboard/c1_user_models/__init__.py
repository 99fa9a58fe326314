"""User models for Taskboard."""

from taskboard.c1_user_models.user import User

__all__ = ["User"]
