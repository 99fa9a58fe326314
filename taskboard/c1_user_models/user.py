"""User database model for Taskboard."""

from sqlalchemy import Column, DateTime, Index, String, Text
from sqlalchemy.orm import relationship

from taskboard.c1_database_session.base import Base
from taskboard.c1_database_session.clock import utcnow


class User(Base):
    """User model for authentication and task assignment."""

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    assigned_tasks = relationship("Task", back_populates="assigned_user")

    __table_args__ = (
        Index("idx_users_created_at", "created_at"),
    )

    def to_public_dict(self):
        """Identity fields safe to return to clients."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
        }
