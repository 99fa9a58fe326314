"""Bearer-token gate applied to every protected route."""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskboard.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches our own 401 shape
bearer_scheme = HTTPBearer(auto_error=False)


def create_current_user_dependency(server_state):
    """Build the dependency that resolves the requester's user id.

    Args:
        server_state: ServerState holding the AuthService

    Returns:
        Callable usable with ``Depends`` that returns the user id and stores
        it on ``request.state.user_id``
    """

    def get_current_user_id(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> str:
        if credentials is None:
            if request.headers.get("Authorization"):
                raise AuthenticationError("Token is not valid")
            raise AuthenticationError("No token, authorization denied")
        user_id = server_state.auth_service.validate_token(credentials.credentials)
        request.state.user_id = user_id
        return user_id

    return get_current_user_id
