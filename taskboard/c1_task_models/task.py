"""Task model for Taskboard."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from taskboard.c1_database_session.base import Base
from taskboard.c1_database_session.clock import utcnow


class Task(Base):
    """Task model representing work assigned to one user."""

    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        String,
        CheckConstraint("status IN ('Pending', 'Completed')"),
        default="Pending",
        nullable=False,
    )
    assigned_user_id = Column(String, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    assigned_user = relationship("User", back_populates="assigned_tasks")

    __table_args__ = (
        Index("idx_tasks_assigned_user", "assigned_user_id"),
        Index("idx_tasks_created_at", "created_at"),
    )
