"""Task models for Taskboard."""

from taskboard.c1_task_models.task import Task

__all__ = ["Task"]
