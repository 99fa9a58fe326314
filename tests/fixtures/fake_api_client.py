"""In-memory stand-in for TaskboardClient.

Behaves like the REST API for a single signed-in user so the dashboard can be
exercised without a server. Individual calls can be made to fail, and hooks
let a test look at the dashboard while a request is "on the wire".
"""

import itertools
from typing import Any, Callable, Dict, List, Optional

from taskboard.client.errors import TaskboardClientError


class FakeApiClient:
    """Fake TaskboardClient keeping tasks in a list, newest first."""

    def __init__(self, users: Optional[List[Dict[str, Any]]] = None):
        self.users = {u["id"]: dict(u) for u in (users or [])}
        self.tasks: List[Dict[str, Any]] = []
        self.calls: List[str] = []
        self.fail: Dict[str, TaskboardClientError] = {}
        self.on_call: Dict[str, Callable[[], None]] = {}
        self._ids = itertools.count(1)
        self._clock = itertools.count(1)

    def _enter(self, name: str):
        self.calls.append(name)
        hook = self.on_call.get(name)
        if hook is not None:
            hook()
        if name in self.fail:
            raise self.fail[name]

    def _stamp(self) -> str:
        return f"2026-01-01T00:00:{next(self._clock):02d}.000Z"

    def _find(self, task_id: str) -> Dict[str, Any]:
        for task in self.tasks:
            if task["id"] == task_id:
                return task
        raise TaskboardClientError("Task not found", status_code=404)

    def seed(self, title: str, assignee_id: str, status: str = "Pending") -> Dict[str, Any]:
        """Put a task on the fake server without recording a call."""
        stamp = self._stamp()
        task = {
            "id": f"task-{next(self._ids)}",
            "title": title,
            "description": f"{title} description",
            "status": status,
            "assignedUserId": self.users[assignee_id],
            "createdAt": stamp,
            "updatedAt": stamp,
        }
        self.tasks.insert(0, task)
        return dict(task)

    def get_all_tasks(self) -> List[Dict[str, Any]]:
        self._enter("get_all_tasks")
        return [dict(t) for t in self.tasks]

    def create_task(self, title: str, description: str, assigned_user_id: str) -> Dict[str, Any]:
        self._enter("create_task")
        stamp = self._stamp()
        task = {
            "id": f"task-{next(self._ids)}",
            "title": title,
            "description": description,
            "status": "Pending",
            "assignedUserId": self.users.get(assigned_user_id),
            "createdAt": stamp,
            "updatedAt": stamp,
        }
        self.tasks.insert(0, task)
        return dict(task)

    def update_task_status(self, task_id: str, status: str) -> Dict[str, Any]:
        self._enter("update_task_status")
        task = self._find(task_id)
        task.update(status=status, updatedAt=self._stamp())
        return dict(task)

    def update_task(self, task_id: str, title=None, description=None) -> Dict[str, Any]:
        self._enter("update_task")
        task = self._find(task_id)
        if title is not None:
            task["title"] = title
        if description is not None:
            task["description"] = description
        task["updatedAt"] = self._stamp()
        return dict(task)

    def delete_task(self, task_id: str) -> Dict[str, Any]:
        self._enter("delete_task")
        self.tasks.remove(self._find(task_id))
        return {"message": "Task deleted successfully"}
