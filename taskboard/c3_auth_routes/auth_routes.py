"""Authentication routes for the Taskboard API."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from taskboard.api.gateway import create_current_user_dependency

logger = logging.getLogger(__name__)


# Request/Response Models
class RegisterRequest(BaseModel):
    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Login email")
    password: Optional[str] = Field(None, description="Plain-text password")


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, description="Login email")
    password: Optional[str] = Field(None, description="Plain-text password")


class UserResponse(BaseModel):
    id: str
    name: str
    email: str


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: str


def create_auth_router(server_state):
    """Create auth router with server_state dependency.

    Args:
        server_state: ServerState instance with auth_service

    Returns:
        APIRouter: Configured router with auth endpoints
    """
    router = APIRouter(prefix="/auth", tags=["auth"])
    get_current_user_id = create_current_user_dependency(server_state)

    @router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
    def register(request: RegisterRequest):
        """Register a new user and return a token."""
        result = server_state.auth_service.register(
            name=request.name,
            email=request.email,
            password=request.password,
        )
        return {"message": "User registered successfully", **result}

    @router.post("/login", response_model=AuthResponse)
    def login(request: LoginRequest):
        """Exchange email and password for a token."""
        result = server_state.auth_service.login(
            email=request.email,
            password=request.password,
        )
        return {"message": "Login successful", **result}

    @router.get("/users", response_model=List[UserResponse])
    def list_users(user_id: str = Depends(get_current_user_id)) -> List[Dict[str, Any]]:
        """List users that tasks can be assigned to."""
        return server_state.auth_service.list_users()

    return router
