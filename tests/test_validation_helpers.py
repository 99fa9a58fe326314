"""Tests for the input validation helpers."""

import pytest

from taskboard.c1_task_enums.task_enums import TaskStatus
from taskboard.c2_validation_service.validation_helpers import (
    collect_errors,
    normalize_email,
    require_text,
    validate_password,
    validate_status,
)
from taskboard.core.errors import ValidationError


class TestValidationHelpers:
    """Test suite for validation helpers."""

    def test_require_text_trims(self):
        assert require_text("  hello \n", "title") == "hello"

    @pytest.mark.parametrize("value", [None, "", "   ", 42])
    def test_require_text_rejects(self, value):
        with pytest.raises(ValidationError) as exc_info:
            require_text(value, "title")

        assert exc_info.value.errors == [{"field": "title", "message": "Title is required"}]

    def test_normalize_email(self):
        assert normalize_email("  Alice@Example.COM ") == "alice@example.com"

    @pytest.mark.parametrize("email", ["plain", "a@b", "two words@example.com"])
    def test_normalize_email_rejects(self, email):
        with pytest.raises(ValidationError, match="valid email"):
            normalize_email(email)

    def test_password_is_not_trimmed(self):
        assert validate_password(" secret ", 6) == " secret "

    def test_password_too_short(self):
        with pytest.raises(ValidationError, match="at least 6 characters"):
            validate_password("12345", 6)

    def test_validate_status(self):
        assert validate_status("Completed") is TaskStatus.COMPLETED

    @pytest.mark.parametrize("status", [None, "", "pending", "Bogus"])
    def test_validate_status_rejects(self, status):
        with pytest.raises(ValidationError) as exc_info:
            validate_status(status)

        assert exc_info.value.errors[0]["field"] == "status"

    def test_collect_errors_reports_every_field(self):
        with pytest.raises(ValidationError) as exc_info:
            collect_errors({
                "title": lambda: require_text("", "title"),
                "description": lambda: require_text("ok", "description"),
                "status": lambda: validate_status("nope"),
            })

        assert [e["field"] for e in exc_info.value.errors] == ["title", "status"]

    def test_collect_errors_returns_values(self):
        values = collect_errors({"title": lambda: require_text(" T ", "title")})

        assert values == {"title": "T"}


class TestTaskStatus:
    def test_toggled(self):
        assert TaskStatus.PENDING.toggled() is TaskStatus.COMPLETED
        assert TaskStatus.COMPLETED.toggled() is TaskStatus.PENDING
