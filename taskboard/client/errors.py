"""Errors raised by the Taskboard HTTP client."""

from typing import Dict, List, Optional


class TaskboardClientError(Exception):
    """A request failed; carries the server's message and field errors when present."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, str]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class TaskboardTimeoutError(TaskboardClientError):
    """The server did not answer within the client timeout."""


class TaskboardNetworkError(TaskboardClientError):
    """The server could not be reached."""
