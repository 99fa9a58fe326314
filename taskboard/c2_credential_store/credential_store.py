"""Persistence for user identities and password hashes."""

import logging
import uuid
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError

from taskboard.c1_database_session.database_manager import DatabaseManager
from taskboard.c1_task_models.task import Task
from taskboard.c1_user_models.user import User
from taskboard.core.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class CredentialStore:
    """Store for User rows. Emails are expected already normalized."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def add_user(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises:
            ConflictError: If the email is already registered
        """
        user = User(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
        )
        try:
            with self.db_manager.session_scope() as db:
                if db.query(User.id).filter_by(email=email).first() is not None:
                    raise ConflictError("User already exists")
                db.add(user)
                db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            logger.warning(f"Duplicate email rejected by unique index: {email}")
            raise ConflictError("User already exists") from None
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        with self.db_manager.session_scope() as db:
            return db.query(User).filter_by(email=email).first()

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self.db_manager.session_scope() as db:
            return db.query(User).filter_by(id=user_id).first()

    def get_many(self, user_ids: Iterable[str]) -> Dict[str, User]:
        """Fetch several users at once, keyed by id. Unknown ids are skipped."""
        ids = set(user_ids)
        if not ids:
            return {}
        with self.db_manager.session_scope() as db:
            users = db.query(User).filter(User.id.in_(ids)).all()
        return {user.id: user for user in users}

    def list_users(self) -> List[User]:
        with self.db_manager.session_scope() as db:
            return db.query(User).order_by(User.name.asc(), User.created_at.asc()).all()

    def delete_user(self, user_id: str) -> None:
        """
        Remove a user that has no assigned tasks.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If any task is still assigned to the user
        """
        with self.db_manager.session_scope() as db:
            user = db.query(User).filter_by(id=user_id).first()
            if user is None:
                raise NotFoundError("User not found")
            assigned = db.query(Task.id).filter_by(assigned_user_id=user_id).count()
            if assigned:
                raise ConflictError(
                    f"User has {assigned} assigned task(s); reassign or delete them first"
                )
            db.delete(user)
