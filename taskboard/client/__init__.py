"""Python client for the Taskboard API."""

from taskboard.client.api_client import TaskboardClient
from taskboard.client.dashboard import TaskDashboard
from taskboard.client.errors import (
    TaskboardClientError,
    TaskboardNetworkError,
    TaskboardTimeoutError,
)
from taskboard.client.task_cache import CacheState, PendingOp, TaskFilter

__all__ = [
    "TaskboardClient",
    "TaskDashboard",
    "TaskboardClientError",
    "TaskboardNetworkError",
    "TaskboardTimeoutError",
    "CacheState",
    "PendingOp",
    "TaskFilter",
]
