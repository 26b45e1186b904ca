"""Pydantic schemas for user payloads and the /users endpoints."""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Field names on the wire are camelCase (isActive); Python attributes stay snake_case.
_USER_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
    extra="ignore",
)


class Friend(BaseModel):
    """Friend entry owned by a user. Ids are caller-assigned and not checked for uniqueness."""

    id: int = 0
    name: str = ""


class UserFields(BaseModel):
    """Profile fields shared by the decoded payload and the stored record."""

    model_config = _USER_MODEL_CONFIG

    is_active: bool = False
    balance: str = ""
    age: str = ""
    name: str = ""
    gender: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    about: str = ""
    registered: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    tags: list[str] = Field(default_factory=list)
    friends: list[Friend] = Field(default_factory=list)
    data: str = ""


class UserPayload(UserFields):
    """User decoded from the JSON string sent in the `file` field."""

    id: str | None = Field(
        default=None,
        description="Only honoured on create; must be empty or absent on update.",
    )
    password: str = Field(..., min_length=1, description="Plain-text password")


class UserRecord(UserFields):
    """Stored user as returned by the API (password is the bcrypt hash)."""

    id: uuid.UUID
    password: str


class FileEnvelope(BaseModel):
    """Request body for create and update: a JSON-encoded user in `file`."""

    file: str = Field(..., description="JSON-encoded user")


class CreateUserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")


class LoginRequest(BaseModel):
    """Credentials for login."""

    id: str = Field(..., description="User id")
    password: str = Field(..., description="Password")


class LoginResponse(BaseModel):
    """Opaque token returned after a successful login."""

    token: str


class UserResponse(BaseModel):
    user: UserRecord


class UsersListResponse(BaseModel):
    users: list[UserRecord]


class MessageResponse(BaseModel):
    message: str
