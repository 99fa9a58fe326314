"""Service layer for managing tasks."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from taskboard.c1_task_models.task import Task
from taskboard.c1_user_models.user import User
from taskboard.c2_credential_store.credential_store import CredentialStore
from taskboard.c2_task_store.task_store import TaskStore
from taskboard.c2_validation_service.validation_helpers import (
    collect_errors,
    require_text,
    validate_status,
)
from taskboard.core.errors import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


@dataclass(frozen=True)
class TaskUpdate:
    """The only fields a general task update may change."""

    title: Optional[str] = None
    description: Optional[str] = None

    def is_empty(self) -> bool:
        return self.title is None and self.description is None


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"


def serialize_task(task: Task, users: Mapping[str, User]) -> Dict[str, Any]:
    """
    Render a task for clients with its assignee joined in.

    Args:
        task: Task row
        users: Users keyed by id; a missing assignee renders as None

    Returns:
        Dictionary with id, title, description, status, assignedUserId
        ({id, name, email} or None), createdAt and updatedAt
    """
    assignee = users.get(task.assigned_user_id)
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "assignedUserId": assignee.to_public_dict() if assignee is not None else None,
        "createdAt": _isoformat(task.created_at),
        "updatedAt": _isoformat(task.updated_at),
    }


class TaskService:
    """Service for task operations on behalf of an authenticated requester."""

    def __init__(
        self,
        task_store: TaskStore,
        credential_store: CredentialStore,
        enforce_ownership: bool = True,
    ):
        self.task_store = task_store
        self.credential_store = credential_store
        self.enforce_ownership = enforce_ownership

    def _render(self, tasks: List[Task]) -> List[Dict[str, Any]]:
        users = self.credential_store.get_many(task.assigned_user_id for task in tasks)
        return [serialize_task(task, users) for task in tasks]

    def _render_one(self, task: Task) -> Dict[str, Any]:
        return self._render([task])[0]

    def _get_owned(self, task_id: str, requester_id: Optional[str]) -> Task:
        """
        Load a task the requester may mutate.

        Raises:
            NotFoundError: If the task does not exist
            AuthorizationError: If ownership is enforced and the requester is not the assignee
        """
        task = self.task_store.get(task_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        if self.enforce_ownership and requester_id is not None and task.assigned_user_id != requester_id:
            logger.warning(
                f"[TASK_SERVICE] User {requester_id} denied change to task {task_id} "
                f"assigned to {task.assigned_user_id}"
            )
            raise AuthorizationError("Only the assigned user can modify this task")
        return task

    def create(
        self,
        title: Optional[str],
        description: Optional[str],
        assigned_user_id: Optional[str],
        requester_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a task. Status always starts as Pending.

        Args:
            title: Task title (trimmed, required)
            description: Task description (trimmed, required)
            assigned_user_id: Id of an existing user
            requester_id: Authenticated user creating the task

        Returns:
            The serialized task with assignee joined

        Raises:
            ValidationError: If a field is blank or the assignee does not exist
        """
        fields = collect_errors({
            "title": lambda: require_text(title, "title", "Title"),
            "description": lambda: require_text(description, "description", "Description"),
            "assignedUserId": lambda: require_text(
                assigned_user_id, "assignedUserId", "Assigned user ID"
            ),
        })

        if self.credential_store.get_by_id(fields["assignedUserId"]) is None:
            raise ValidationError.for_field("assignedUserId", "Assigned user does not exist")

        task = self.task_store.insert(
            title=fields["title"],
            description=fields["description"],
            assigned_user_id=fields["assignedUserId"],
        )
        logger.info(
            f"[TASK_SERVICE] User {requester_id} created task {task.id} "
            f"for {task.assigned_user_id}"
        )
        return self._render_one(task)

    def list_all(self) -> List[Dict[str, Any]]:
        """Every task, most recently created first."""
        return self._render(self.task_store.list())

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Tasks assigned to user_id, most recently created first."""
        return self._render(self.task_store.list(assigned_user_id=user_id))

    def list_mine(self, requester_id: str) -> List[Dict[str, Any]]:
        """Tasks assigned to the requester, most recently created first."""
        return self.list_by_user(requester_id)

    def update_status(
        self,
        task_id: str,
        new_status: Optional[str],
        requester_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Set a task's status to exactly the value given.

        Raises:
            ValidationError: If new_status is not Pending or Completed
            NotFoundError: If the task does not exist
            AuthorizationError: If the requester may not modify the task
        """
        status = validate_status(new_status)
        self._get_owned(task_id, requester_id)

        task = self.task_store.update(task_id, status=status)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info(f"[TASK_SERVICE] Task {task_id} status -> {status.value}")
        return self._render_one(task)

    def update(
        self,
        task_id: str,
        changes: TaskUpdate,
        requester_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Merge title and/or description onto a task.

        Raises:
            ValidationError: If a provided field is blank after trimming
            NotFoundError: If the task does not exist
            AuthorizationError: If the requester may not modify the task
        """
        checks = {}
        if changes.title is not None:
            checks["title"] = lambda: require_text(changes.title, "title", "Title")
        if changes.description is not None:
            checks["description"] = lambda: require_text(
                changes.description, "description", "Description"
            )
        fields = collect_errors(checks)

        task = self._get_owned(task_id, requester_id)
        if not fields:
            return self._render_one(task)

        task = self.task_store.update(task_id, **fields)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info(f"[TASK_SERVICE] Task {task_id} updated fields: {sorted(fields)}")
        return self._render_one(task)

    def delete(self, task_id: str, requester_id: Optional[str] = None) -> Dict[str, str]:
        """
        Permanently remove a task.

        Raises:
            NotFoundError: If the task does not exist
            AuthorizationError: If the requester may not modify the task
        """
        self._get_owned(task_id, requester_id)
        if not self.task_store.delete(task_id):
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info(f"[TASK_SERVICE] Task {task_id} deleted by {requester_id}")
        return {"message": "Task deleted successfully"}
