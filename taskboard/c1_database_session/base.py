"""Database base and declarative_base for Taskboard."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
