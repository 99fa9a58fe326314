"""Validation helpers for user and task input."""

import re
from typing import Callable, Dict, List, Optional

from taskboard.c1_task_enums.task_enums import TaskStatus
from taskboard.core.errors import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_text(value: Optional[str], field: str, label: Optional[str] = None) -> str:
    """
    Trim a required string field.

    Args:
        value: Raw input value
        field: Field name reported in the error list
        label: Human-readable name used in the message

    Returns:
        The trimmed value

    Raises:
        ValidationError: If the value is missing or blank after trimming
    """
    label = label or field.capitalize()
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError.for_field(field, f"{label} is required")
    return value.strip()


def normalize_email(email: Optional[str]) -> str:
    """
    Trim and lower-case an email used as a login key.

    Raises:
        ValidationError: If the email is missing or not shaped like an address
    """
    email = require_text(email, "email", "Email")
    email = email.lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError.for_field("email", "Please provide a valid email")
    return email


def validate_password(password: Optional[str], min_length: int) -> str:
    """
    Check password presence and minimum length. Passwords are not trimmed.

    Raises:
        ValidationError: If the password is missing or too short
    """
    if password is None or not isinstance(password, str) or password == "":
        raise ValidationError.for_field("password", "Password is required")
    if len(password) < min_length:
        raise ValidationError.for_field(
            "password", f"Password must be at least {min_length} characters"
        )
    return password


def validate_status(status: Optional[str]) -> TaskStatus:
    """
    Parse a task status.

    Raises:
        ValidationError: If status is not one of Pending / Completed
    """
    try:
        return TaskStatus(status)
    except ValueError:
        raise ValidationError.for_field(
            "status", "Status must be Pending or Completed"
        ) from None


def collect_errors(checks: Dict[str, Callable[[], object]]) -> Dict[str, object]:
    """
    Run several field checks and report every failure at once.

    Args:
        checks: Mapping of field name to a zero-argument validator

    Returns:
        Mapping of field name to the validated value

    Raises:
        ValidationError: Carrying one entry per failing field
    """
    results: Dict[str, object] = {}
    errors: List[Dict[str, str]] = []
    for field, check in checks.items():
        try:
            results[field] = check()
        except ValidationError as e:
            errors.extend(e.errors or [{"field": field, "message": e.message}])
    if errors:
        raise ValidationError(errors[0]["message"], errors=errors)
    return results
