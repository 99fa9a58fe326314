"""Database session management for Taskboard."""

from taskboard.c1_database_session.base import Base
from taskboard.c1_database_session.database_manager import DatabaseManager

__all__ = ["Base", "DatabaseManager"]
