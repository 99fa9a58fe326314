"""Service layer for registration, login and token validation."""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from taskboard.c2_auth_service.passwords import hash_password, verify_password
from taskboard.c2_auth_service.tokens import create_access_token, verify_access_token
from taskboard.c2_credential_store.credential_store import CredentialStore
from taskboard.c2_validation_service.validation_helpers import (
    collect_errors,
    normalize_email,
    require_text,
    validate_password,
)
from taskboard.core.config import AuthConfig
from taskboard.core.errors import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Checked when the email is unknown so both failure paths cost one bcrypt round
    return hash_password("taskboard-timing-equalizer")


class AuthService:
    """Issues and validates bearer tokens for users in the Credential Store."""

    def __init__(self, credential_store: CredentialStore, config: AuthConfig):
        self.credential_store = credential_store
        self.config = config

    def _issue_token(self, user) -> str:
        return create_access_token({"sub": user.id}, config=self.config)

    def register(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """
        Register a new user and sign them in.

        Returns:
            {"user": {id, name, email}, "token": str}

        Raises:
            ValidationError: If a field is missing/blank or the password is too short
            ConflictError: If the email is already registered
        """
        fields = collect_errors({
            "name": lambda: require_text(name, "name", "Name"),
            "email": lambda: normalize_email(email),
            "password": lambda: validate_password(password, self.config.min_password_length),
        })

        logger.info(f"[AUTH_SERVICE] Registering {fields['email']}")
        user = self.credential_store.add_user(
            name=fields["name"],
            email=fields["email"],
            password_hash=hash_password(fields["password"]),
        )
        logger.info(f"[AUTH_SERVICE] Registered user {user.id}")
        return {"user": user.to_public_dict(), "token": self._issue_token(user)}

    def login(self, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password raise the same error.

        Raises:
            ValidationError: If email or password is missing
            AuthenticationError: If the credentials do not match
        """
        fields = collect_errors({
            "email": lambda: normalize_email(email),
            "password": lambda: validate_password(password, 1),
        })

        user = self.credential_store.get_by_email(fields["email"])
        if user is None:
            verify_password(fields["password"], _dummy_hash())
            logger.warning("[AUTH_SERVICE] Login failed")
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not verify_password(fields["password"], user.password_hash):
            logger.warning(f"[AUTH_SERVICE] Login failed for user {user.id}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info(f"[AUTH_SERVICE] User {user.id} logged in")
        return {"user": user.to_public_dict(), "token": self._issue_token(user)}

    def validate_token(self, token: Optional[str]) -> str:
        """
        Resolve a bearer token to the user id it was issued for.

        Raises:
            AuthenticationError: If the token is missing, malformed, expired,
                wrongly signed, or names a user that no longer exists
        """
        if not token:
            raise AuthenticationError("No token, authorization denied")
        payload = verify_access_token(token, config=self.config)
        if payload is None:
            raise AuthenticationError("Token is not valid")
        user_id = payload["sub"]
        if self.credential_store.get_by_id(user_id) is None:
            raise AuthenticationError("Token is not valid")
        return user_id

    def list_users(self) -> List[Dict[str, Any]]:
        """All users as {id, name, email}; never includes the password hash."""
        return [user.to_public_dict() for user in self.credential_store.list_users()]

    def delete_user(self, user_id: str) -> None:
        """
        Delete a user. Refused while tasks are still assigned to them.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If tasks reference the user
        """
        if not user_id:
            raise ValidationError.for_field("userId", "User id is required")
        self.credential_store.delete_user(user_id)
        logger.info(f"[AUTH_SERVICE] Deleted user {user_id}")
