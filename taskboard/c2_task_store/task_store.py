"""Persistence for tasks."""

import logging
import uuid
from typing import List, Optional

from taskboard.c1_database_session.clock import utcnow
from taskboard.c1_database_session.database_manager import DatabaseManager
from taskboard.c1_task_enums.task_enums import TaskStatus
from taskboard.c1_task_models.task import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """Store for Task rows. Each method is one transaction on one task."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def insert(self, title: str, description: str, assigned_user_id: str,
               status: TaskStatus = TaskStatus.PENDING) -> Task:
        now = utcnow()
        task = Task(
            id=str(uuid.uuid4()),
            title=title,
            description=description,
            status=status.value,
            assigned_user_id=assigned_user_id,
            created_at=now,
            updated_at=now,
        )
        with self.db_manager.session_scope() as db:
            db.add(task)
        return task

    def get(self, task_id: str) -> Optional[Task]:
        with self.db_manager.session_scope() as db:
            return db.query(Task).filter_by(id=task_id).first()

    def list(self, assigned_user_id: Optional[str] = None) -> List[Task]:
        """All tasks, most recently created first, optionally for one assignee."""
        with self.db_manager.session_scope() as db:
            query = db.query(Task)
            if assigned_user_id is not None:
                query = query.filter_by(assigned_user_id=assigned_user_id)
            return query.order_by(Task.created_at.desc()).all()

    def update(self, task_id: str, **fields) -> Optional[Task]:
        """
        Set the given columns on one task and bump updated_at.

        Returns:
            The updated task, or None if the id is unknown
        """
        with self.db_manager.session_scope() as db:
            task = db.query(Task).filter_by(id=task_id).first()
            if task is None:
                return None
            for key, value in fields.items():
                if isinstance(value, TaskStatus):
                    value = value.value
                setattr(task, key, value)
            task.updated_at = utcnow()
            db.flush()
            return task

    def delete(self, task_id: str) -> bool:
        """Remove a task permanently. Returns False if the id is unknown."""
        with self.db_manager.session_scope() as db:
            deleted = db.query(Task).filter_by(id=task_id).delete()
        return deleted > 0
