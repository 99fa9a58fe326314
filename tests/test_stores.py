"""Tests for the credential and task stores."""

import pytest

from taskboard.c1_task_enums.task_enums import TaskStatus
from taskboard.core.errors import ConflictError, NotFoundError


class TestCredentialStore:
    """Test suite for CredentialStore."""

    def test_add_and_lookup(self, credential_store):
        user = credential_store.add_user("Alice", "alice@example.com", "hash")

        assert credential_store.get_by_email("alice@example.com").id == user.id
        assert credential_store.get_by_id(user.id).name == "Alice"
        assert credential_store.get_by_id("missing") is None

    def test_duplicate_email(self, credential_store):
        credential_store.add_user("Alice", "alice@example.com", "hash")

        with pytest.raises(ConflictError):
            credential_store.add_user("Alice 2", "alice@example.com", "hash2")

        assert len(credential_store.list_users()) == 1

    def test_get_many_skips_unknown(self, credential_store):
        a = credential_store.add_user("A", "a@example.com", "h")
        b = credential_store.add_user("B", "b@example.com", "h")

        users = credential_store.get_many([a.id, b.id, "ghost"])

        assert set(users) == {a.id, b.id}
        assert credential_store.get_many([]) == {}

    def test_delete_user_without_tasks(self, credential_store):
        user = credential_store.add_user("A", "a@example.com", "h")

        credential_store.delete_user(user.id)

        assert credential_store.get_by_id(user.id) is None

    def test_delete_user_with_tasks_is_refused(self, credential_store, task_store):
        user = credential_store.add_user("A", "a@example.com", "h")
        task_store.insert("T", "D", user.id)

        with pytest.raises(ConflictError):
            credential_store.delete_user(user.id)

        assert credential_store.get_by_id(user.id) is not None

    def test_delete_unknown_user(self, credential_store):
        with pytest.raises(NotFoundError):
            credential_store.delete_user("ghost")


class TestTaskStore:
    """Test suite for TaskStore."""

    @pytest.fixture
    def owner(self, credential_store):
        return credential_store.add_user("Owner", "owner@example.com", "h")

    def test_insert_defaults(self, task_store, owner):
        task = task_store.insert("Title", "Desc", owner.id)

        stored = task_store.get(task.id)
        assert stored.status == TaskStatus.PENDING.value
        assert stored.created_at == stored.updated_at

    def test_list_is_newest_first(self, task_store, owner):
        a = task_store.insert("A", "d", owner.id)
        b = task_store.insert("B", "d", owner.id)
        c = task_store.insert("C", "d", owner.id)

        assert [t.id for t in task_store.list()] == [c.id, b.id, a.id]

    def test_list_filters_by_assignee(self, task_store, owner, credential_store):
        other = credential_store.add_user("Other", "other@example.com", "h")
        mine = task_store.insert("Mine", "d", owner.id)
        task_store.insert("Theirs", "d", other.id)

        assert [t.id for t in task_store.list(assigned_user_id=owner.id)] == [mine.id]
        assert len(task_store.list(assigned_user_id=other.id)) == 1

    def test_update_bumps_updated_at(self, task_store, owner):
        task = task_store.insert("A", "d", owner.id)

        updated = task_store.update(task.id, status=TaskStatus.COMPLETED, title="B")

        assert updated.status == "Completed"
        assert updated.title == "B"
        assert updated.updated_at > updated.created_at
        assert task_store.update("missing", title="x") is None

    def test_delete(self, task_store, owner):
        task = task_store.insert("A", "d", owner.id)

        assert task_store.delete(task.id) is True
        assert task_store.get(task.id) is None
        assert task_store.delete(task.id) is False
