"""Dashboard controller: cached task list with optimistic mutations."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Hashable, Optional, Set, Tuple

from taskboard.c1_task_enums.task_enums import TaskStatus
from taskboard.client import task_cache
from taskboard.client.api_client import TaskboardClient
from taskboard.client.errors import TaskboardClientError
from taskboard.client.task_cache import CacheState, PendingOp, TaskFilter

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load data"
CREATE_FAILED = "Failed to create task"
UPDATE_FAILED = "Failed to update task"
STATUS_FAILED = "Failed to update task status"
DELETE_FAILED = "Failed to delete task"
NOT_ASSIGNEE = "Only the assigned user can change this task's status"


class TaskDashboard:
    """Keeps the task list for one signed-in user.

    Mutations patch the cache before the request is sent, commit the
    server's copy on success, and on failure undo the patch and re-fetch.
    The same action cannot be re-entered while it is in flight; distinct
    actions (e.g. toggling two different tasks) are independent.

    Args:
        client: Authenticated TaskboardClient
        user: The signed-in user as {id, name, email}
    """

    def __init__(self, client: TaskboardClient, user: Dict[str, Any]):
        self.client = client
        self.user = dict(user)
        self.state = CacheState()
        self.error: Optional[str] = None
        self._in_flight: Set[Hashable] = set()

    @property
    def user_id(self) -> str:
        return self.user["id"]

    @property
    def tasks(self) -> Tuple[Dict[str, Any], ...]:
        return self.state.tasks

    def is_busy(self, action: Hashable) -> bool:
        """Whether the control for ``action`` should be disabled."""
        return action in self._in_flight

    def refresh(self) -> bool:
        """Replace the cache with the server's full list."""
        try:
            tasks = self.client.get_all_tasks()
        except TaskboardClientError as e:
            logger.warning(f"[DASHBOARD] Refresh failed: {e.message}")
            self.error = LOAD_FAILED
            return False
        self.state = task_cache.replace_all(self.state, tasks)
        self.error = None
        return True

    def _mutate(
        self,
        action: Hashable,
        begin: Callable[[CacheState], Tuple[CacheState, PendingOp]],
        send: Callable[[], Optional[Dict[str, Any]]],
        failure_message: str,
    ) -> Optional[Dict[str, Any]]:
        if action in self._in_flight:
            logger.debug(f"[DASHBOARD] Ignoring re-entrant {action}")
            return None

        self._in_flight.add(action)
        try:
            self.state, op = begin(self.state)
            try:
                result = send()
            except TaskboardClientError as e:
                logger.warning(f"[DASHBOARD] {action} failed: {e.message}")
                self.state = task_cache.rollback(self.state, op)
                self.refresh()
                self.error = failure_message
                return None
            self.state = task_cache.commit(self.state, op, result)
            self.error = None
            return result if result is not None else {}
        finally:
            self._in_flight.discard(action)

    def create_task(
        self,
        title: str,
        description: str,
        assignee: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Create a task, assigned to the signed-in user unless another user is given."""
        assignee = assignee or self.user
        now = datetime.now(timezone.utc).isoformat()
        return self._mutate(
            "create",
            lambda state: task_cache.begin_create(state, title, description, assignee, now=now),
            lambda: self.client.create_task(title, description, assignee["id"]),
            CREATE_FAILED,
        )

    def can_toggle(self, task: Dict[str, Any]) -> bool:
        return task_cache.assignee_id(task) == self.user_id

    def toggle_status(self, task_id: str) -> Optional[Dict[str, Any]]:
        """Flip Pending <-> Completed. Only offered to the task's assignee."""
        task = self.state.find(task_id)
        if task is None:
            self.error = STATUS_FAILED
            return None
        if not self.can_toggle(task):
            self.error = NOT_ASSIGNEE
            return None

        new_status = TaskStatus(task["status"]).toggled().value
        return self._mutate(
            ("status", task_id),
            lambda state: task_cache.begin_status(state, task_id, new_status),
            lambda: self.client.update_task_status(task_id, new_status),
            STATUS_FAILED,
        )

    def update_task(
        self,
        task_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        if self.state.find(task_id) is None:
            self.error = UPDATE_FAILED
            return None
        return self._mutate(
            ("update", task_id),
            lambda state: task_cache.begin_update(state, task_id, title, description),
            lambda: self.client.update_task(task_id, title=title, description=description),
            UPDATE_FAILED,
        )

    def delete_task(self, task_id: str) -> bool:
        if self.state.find(task_id) is None:
            self.error = DELETE_FAILED
            return False

        def send():
            self.client.delete_task(task_id)
            return None

        result = self._mutate(
            ("delete", task_id),
            lambda state: task_cache.begin_delete(state, task_id),
            send,
            DELETE_FAILED,
        )
        return result is not None

    def view(self, task_filter=TaskFilter.ALL, status: Optional[str] = None):
        """Tasks for a dashboard filter; ``status`` narrows the "my-tasks" view further."""
        tasks = task_cache.apply_filter(self.state.tasks, task_filter, self.user_id)
        if status is not None:
            tasks = task_cache.filter_tasks(tasks, status=TaskStatus(status).value)
        return tasks

    def stats(self) -> Dict[str, int]:
        return task_cache.task_stats(self.state.tasks, self.user_id)
