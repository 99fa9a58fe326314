"""Unit tests for the task service."""

import pytest

from taskboard.c2_task_service.task_service import TaskService, TaskUpdate
from taskboard.core.errors import AuthorizationError, NotFoundError, ValidationError


class TestTaskService:
    """Test suite for TaskService."""

    @pytest.fixture
    def alice_id(self, alice):
        return alice["user"]["id"]

    @pytest.fixture
    def bob_id(self, bob):
        return bob["user"]["id"]

    @pytest.fixture
    def task(self, task_service, alice_id):
        return task_service.create("Write report", "Quarterly numbers", alice_id, alice_id)

    def test_create_then_list_all(self, task_service, alice_id):
        task_service.create("T", "D", alice_id, alice_id)

        first = task_service.list_all()[0]
        assert first["title"] == "T"
        assert first["description"] == "D"
        assert first["status"] == "Pending"
        assert first["assignedUserId"] == {
            "id": alice_id,
            "name": "Alice",
            "email": "alice@example.com",
        }

    def test_create_trims_fields(self, task_service, alice_id):
        task = task_service.create("  T  ", "\tD\n", alice_id, alice_id)

        assert task["title"] == "T"
        assert task["description"] == "D"

    @pytest.mark.parametrize(
        "title,description,assignee,field",
        [
            ("", "D", "use-alice", "title"),
            ("   ", "D", "use-alice", "title"),
            ("T", None, "use-alice", "description"),
            ("T", "D", None, "assignedUserId"),
            ("T", "D", "ghost-user", "assignedUserId"),
        ],
    )
    def test_create_validation(self, task_service, alice_id, title, description, assignee, field):
        assignee = alice_id if assignee == "use-alice" else assignee

        with pytest.raises(ValidationError) as exc_info:
            task_service.create(title, description, assignee, alice_id)

        assert exc_info.value.errors[0]["field"] == field
        assert task_service.list_all() == []

    def test_list_all_ordering(self, task_service, alice_id):
        for title in ("A", "B", "C"):
            task_service.create(title, "d", alice_id, alice_id)

        assert [t["title"] for t in task_service.list_all()] == ["C", "B", "A"]

    def test_list_by_user_and_mine(self, task_service, alice_id, bob_id):
        task_service.create("For Alice", "d", alice_id, bob_id)
        task_service.create("For Bob", "d", bob_id, alice_id)

        assert [t["title"] for t in task_service.list_by_user(bob_id)] == ["For Bob"]
        assert [t["title"] for t in task_service.list_mine(alice_id)] == ["For Alice"]
        assert task_service.list_by_user("nobody") == []

    def test_status_round_trip(self, task_service, task, alice_id):
        completed = task_service.update_status(task["id"], "Completed", alice_id)
        assert completed["status"] == "Completed"

        restored = task_service.update_status(task["id"], "Pending", alice_id)
        assert restored["status"] == "Pending"
        assert restored["updatedAt"] >= restored["createdAt"]

    def test_status_is_set_not_toggled(self, task_service, task, alice_id):
        task_service.update_status(task["id"], "Completed", alice_id)
        again = task_service.update_status(task["id"], "Completed", alice_id)

        assert again["status"] == "Completed"

    def test_invalid_status_leaves_task_unchanged(self, task_service, task, alice_id):
        with pytest.raises(ValidationError):
            task_service.update_status(task["id"], "Bogus", alice_id)

        assert task_service.list_all()[0]["status"] == "Pending"

    def test_update_merges_known_fields(self, task_service, task, alice_id):
        updated = task_service.update(task["id"], TaskUpdate(title=" New title "), alice_id)

        assert updated["title"] == "New title"
        assert updated["description"] == "Quarterly numbers"

    def test_update_rejects_blank_field(self, task_service, task, alice_id):
        with pytest.raises(ValidationError) as exc_info:
            task_service.update(task["id"], TaskUpdate(description="   "), alice_id)

        assert exc_info.value.errors[0]["field"] == "description"

    def test_update_with_no_fields_is_a_no_op(self, task_service, task, alice_id):
        result = task_service.update(task["id"], TaskUpdate(), alice_id)

        assert result == task

    def test_operations_after_delete_fail(self, task_service, task, alice_id):
        assert task_service.delete(task["id"], alice_id) == {"message": "Task deleted successfully"}

        with pytest.raises(NotFoundError):
            task_service.update_status(task["id"], "Completed", alice_id)
        with pytest.raises(NotFoundError):
            task_service.update(task["id"], TaskUpdate(title="x"), alice_id)
        with pytest.raises(NotFoundError):
            task_service.delete(task["id"], alice_id)
        assert task_service.list_all() == []

    def test_non_assignee_cannot_mutate(self, task_service, task, bob_id):
        with pytest.raises(AuthorizationError):
            task_service.update_status(task["id"], "Completed", bob_id)
        with pytest.raises(AuthorizationError):
            task_service.update(task["id"], TaskUpdate(title="x"), bob_id)
        with pytest.raises(AuthorizationError):
            task_service.delete(task["id"], bob_id)

        assert task_service.list_all()[0]["status"] == "Pending"

    def test_ownership_can_be_disabled(self, task_store, credential_store, task, bob_id):
        permissive = TaskService(task_store, credential_store, enforce_ownership=False)

        updated = permissive.update_status(task["id"], "Completed", bob_id)

        assert updated["status"] == "Completed"

    def test_assignee_cannot_be_deleted_while_tasks_exist(self, auth_service, task, alice_id):
        from taskboard.core.errors import ConflictError

        with pytest.raises(ConflictError):
            auth_service.delete_user(alice_id)
