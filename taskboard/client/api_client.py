"""HTTP client for the Taskboard API."""

import logging
from typing import Any, Dict, List, Optional

import requests

from taskboard.client.errors import (
    TaskboardClientError,
    TaskboardNetworkError,
    TaskboardTimeoutError,
)
from taskboard.core.config import get_settings

logger = logging.getLogger(__name__)


class TaskboardClient:
    """Thin wrapper over the REST API that attaches the bearer token.

    Args:
        base_url: API root including the prefix, e.g. http://localhost:5000/api
        token: Bearer token from a previous login
        timeout: Seconds before a request fails with TaskboardTimeoutError
        session: requests.Session to reuse (a new one is created otherwise)
        min_password_length: Shortest password register() will send
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        min_password_length: Optional[int] = None,
    ):
        if base_url is None or timeout is None or min_password_length is None:
            client_config = get_settings().client
            base_url = base_url or client_config.base_url
            timeout = timeout or client_config.timeout_seconds
            min_password_length = min_password_length or client_config.min_password_length
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.min_password_length = min_password_length
        self.session = session or requests.Session()
        self.session.headers.setdefault("Content-Type", "application/json")

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, json=json, headers=headers, timeout=self.timeout
            )
        except requests.Timeout as e:
            logger.error(f"[TASK_CLIENT] {method} {path} timed out after {self.timeout}s")
            raise TaskboardTimeoutError(
                "Request timeout - the server might be waking up. Please try again."
            ) from e
        except requests.ConnectionError as e:
            logger.error(f"[TASK_CLIENT] {method} {path} could not reach {self.base_url}")
            raise TaskboardNetworkError("Network error - check that the backend is running") from e
        except requests.RequestException as e:
            logger.error(f"[TASK_CLIENT] {method} {path} failed: {e}")
            raise TaskboardNetworkError("Network error - please try again") from e

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") if isinstance(body, dict) else None
            errors = body.get("errors") if isinstance(body, dict) else None
            raise TaskboardClientError(
                message or f"Request failed with status {response.status_code}",
                status_code=response.status_code,
                errors=errors,
            )
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"[TASK_CLIENT] {method} {path} returned a non-JSON body")
            raise TaskboardClientError(
                "Invalid response from server", status_code=response.status_code
            ) from e

    @staticmethod
    def _unwrap(result: Any, key: str) -> Any:
        if not isinstance(result, dict) or key not in result:
            raise TaskboardClientError(f"Invalid response from server: missing '{key}'")
        return result[key]

    # Auth API
    def register(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create an account and keep its token.

        The password is checked locally first; nothing is sent when it is
        too short or does not match ``confirm_password``.

        Raises:
            TaskboardClientError: On a local check failure or a server error
        """
        if confirm_password is not None and password != confirm_password:
            raise TaskboardClientError(
                "Passwords do not match",
                errors=[{"field": "confirmPassword", "message": "Passwords do not match"}],
            )
        if len(password or "") < self.min_password_length:
            message = f"Password must be at least {self.min_password_length} characters"
            raise TaskboardClientError(message, errors=[{"field": "password", "message": message}])

        result = self._request("POST", "/auth/register", {"name": name, "email": email, "password": password})
        self.token = self._unwrap(result, "token")
        return result

    def login(self, email: str, password: str) -> Dict[str, Any]:
        result = self._request("POST", "/auth/login", {"email": email, "password": password})
        self.token = self._unwrap(result, "token")
        return result

    def logout(self):
        self.token = None

    def get_users(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/auth/users")

    # Task API
    def create_task(self, title: str, description: str, assigned_user_id: str) -> Dict[str, Any]:
        result = self._request(
            "POST",
            "/tasks",
            {"title": title, "description": description, "assignedUserId": assigned_user_id},
        )
        return self._unwrap(result, "task")

    def get_all_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/tasks")

    def get_tasks_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/tasks/user/{user_id}")

    def get_my_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/tasks/my-tasks")

    def update_task_status(self, task_id: str, status: str) -> Dict[str, Any]:
        result = self._request("PATCH", f"/tasks/{task_id}/status", {"status": status})
        return self._unwrap(result, "task")

    def update_task(
        self,
        task_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        body = {}
        if title is not None:
            body["title"] = title
        if description is not None:
            body["description"] = description
        return self._unwrap(self._request("PUT", f"/tasks/{task_id}", body), "task")

    def delete_task(self, task_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}")
