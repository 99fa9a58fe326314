"""Task enums for Taskboard."""

from taskboard.c1_task_enums.task_enums import TaskStatus

__all__ = ["TaskStatus"]
