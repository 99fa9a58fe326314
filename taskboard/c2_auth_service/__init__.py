"""Auth Service: registration, login and bearer tokens."""

from taskboard.c2_auth_service.passwords import hash_password, verify_password
from taskboard.c2_auth_service.tokens import create_access_token, verify_access_token
from taskboard.c2_auth_service.auth_service import AuthService

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "verify_access_token",
    "AuthService",
]
