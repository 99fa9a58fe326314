"""Input validation helpers for Taskboard services."""

from taskboard.c2_validation_service.validation_helpers import (
    normalize_email,
    require_text,
    validate_password,
    validate_status,
    collect_errors,
)

__all__ = [
    "normalize_email",
    "require_text",
    "validate_password",
    "validate_status",
    "collect_errors",
]
