"""Task Store: persisted tasks."""

from taskboard.c2_task_store.task_store import TaskStore

__all__ = ["TaskStore"]
