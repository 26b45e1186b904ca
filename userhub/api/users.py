"""User account endpoints: create, login, list, get, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from userhub.core.artifacts import ArtifactStore, get_artifact_store
from userhub.core.config import get_settings
from userhub.core.database import get_db
from userhub.schemas.user import (
    CreateUserResponse,
    FileEnvelope,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    UserResponse,
    UsersListResponse,
)
from userhub.services.accounts import AccountService
from userhub.services.errors import AccountError

router = APIRouter()


def get_account_service(
    db: Annotated[Session, Depends(get_db)],
    artifacts: Annotated[ArtifactStore, Depends(get_artifact_store)],
) -> AccountService:
    """Dependency: account service bound to this request's session."""
    return AccountService(db, artifacts, get_settings())


Accounts = Annotated[AccountService, Depends(get_account_service)]


def _http_error(e: AccountError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=CreateUserResponse)
def create_user(body: FileEnvelope, accounts: Accounts) -> CreateUserResponse:
    """Create a user from the JSON-encoded user in `file`. Returns the assigned id."""
    try:
        user_id = accounts.create_user(body.file)
    except AccountError as e:
        raise _http_error(e) from e
    return CreateUserResponse(user_id=user_id)


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, accounts: Accounts) -> LoginResponse:
    """Authenticate with id and password; returns an opaque token."""
    try:
        token = accounts.login(body.id, body.password)
    except AccountError as e:
        raise _http_error(e) from e
    return LoginResponse(token=token)


@router.get("", response_model=UsersListResponse)
def list_users(accounts: Accounts) -> UsersListResponse:
    try:
        users = accounts.list_users()
    except AccountError as e:
        raise _http_error(e) from e
    return UsersListResponse(users=users)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, accounts: Accounts) -> UserResponse:
    try:
        user = accounts.get_user(user_id)
    except AccountError as e:
        raise _http_error(e) from e
    return UserResponse(user=user)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, accounts: Accounts) -> MessageResponse:
    """Delete the user record and its artifact file."""
    try:
        accounts.delete_user(user_id)
    except AccountError as e:
        raise _http_error(e) from e
    return MessageResponse(message="User deleted successfully")


@router.put("/{user_id}", response_model=MessageResponse)
def update_user(user_id: str, body: FileEnvelope, accounts: Accounts) -> MessageResponse:
    """
    Replace all fields of the user except the id. Unchanged fields must be resent.
    A payload that sets `id` is rejected.
    """
    try:
        accounts.update_user(user_id, body.file)
    except AccountError as e:
        raise _http_error(e) from e
    return MessageResponse(message="User updated successfully")
