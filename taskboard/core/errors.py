"""Error taxonomy shared by the Taskboard services and API."""

from typing import Any, Dict, List, Optional


class TaskboardError(Exception):
    """Base class for errors that reach the API boundary as structured JSON."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(TaskboardError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Validation failed"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])


class AuthenticationError(TaskboardError):
    """Bad credentials or a missing, malformed or expired token."""

    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(TaskboardError):
    """Authenticated, but not allowed to touch the resource."""

    status_code = 403
    default_message = "Not allowed"


class NotFoundError(TaskboardError):
    status_code = 404
    default_message = "Not found"


class ConflictError(TaskboardError):
    """Duplicate unique key or a reference that blocks the operation."""

    status_code = 409
    default_message = "Conflict"


class InternalError(TaskboardError):
    status_code = 500
    default_message = "Server error"
