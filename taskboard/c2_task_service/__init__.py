"""Task Service: task CRUD and status changes."""

from taskboard.c2_task_service.task_service import TaskService, TaskUpdate, serialize_task

__all__ = ["TaskService", "TaskUpdate", "serialize_task"]
