"""Task Enums for Taskboard."""

from enum import Enum


class TaskStatus(str, Enum):
    """Two-state task lifecycle; either transition is always legal."""
    PENDING = "Pending"
    COMPLETED = "Completed"

    def toggled(self) -> "TaskStatus":
        if self is TaskStatus.PENDING:
            return TaskStatus.COMPLETED
        return TaskStatus.PENDING
