"""Pydantic request/response schemas."""

from userhub.schemas.health import HealthResponse
from userhub.schemas.user import (
    CreateUserResponse,
    FileEnvelope,
    Friend,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    UserPayload,
    UserRecord,
    UserResponse,
    UsersListResponse,
)

__all__ = [
    "CreateUserResponse",
    "FileEnvelope",
    "Friend",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "UserPayload",
    "UserRecord",
    "UserResponse",
    "UsersListResponse",
]
