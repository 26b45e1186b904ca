"""
Account lifecycle: create, login, read, list, update and delete users.

Each user is a row in the record store plus a text artifact (<id>.txt) in the
artifact store. The two writes are not transactional; see create_user and
delete_user for how partial failures are reported.
"""

import logging
import uuid
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from userhub.core.artifacts import ArtifactStore
from userhub.core.database import is_statement_timeout
from userhub.core.security import (
    HashingError,
    generate_default_token,
    hash_password,
    verify_password,
)
from userhub.models import User
from userhub.schemas.user import UserPayload, UserRecord
from userhub.services.errors import (
    ArtifactError,
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    StorageError,
    ValidationError,
)

if TYPE_CHECKING:
    from userhub.core.config import Settings

logger = logging.getLogger(__name__)


def parse_user_id(raw: str | None) -> uuid.UUID:
    """Parse an id from a path or login body. Any malformed id is an auth failure."""
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError, AttributeError):
        raise AuthError("invalid id") from None


def decode_user_payload(encoded: str) -> UserPayload:
    """Decode the JSON-encoded user carried in a request's `file` field."""
    try:
        return UserPayload.model_validate_json(encoded)
    except PydanticValidationError as e:
        raise ValidationError(f"invalid user payload: {e.errors()[0]['msg']}") from e


def _storage_error(exc: SQLAlchemyError, action: str) -> StorageError:
    if is_statement_timeout(exc):
        return StorageError("timeout")
    return StorageError(f"failed to {action}")


def _apply_payload(row: User, payload: UserPayload, password_hash: str) -> None:
    """Copy every payload field except id onto row (full replace, not merge)."""
    row.password = password_hash
    row.is_active = payload.is_active
    row.balance = payload.balance
    row.age = payload.age
    row.name = payload.name
    row.gender = payload.gender
    row.company = payload.company
    row.email = payload.email
    row.phone = payload.phone
    row.address = payload.address
    row.about = payload.about
    row.registered = payload.registered
    row.latitude = payload.latitude
    row.longitude = payload.longitude
    row.tags = list(payload.tags)
    row.friends = [f.model_dump() for f in payload.friends]
    row.data = payload.data


class AccountService:
    """
    Orchestrates the record store, the artifact store and the credential hasher.

    Stateless apart from the handles it is built with; one instance per request.
    """

    def __init__(self, db: Session, artifacts: ArtifactStore, settings: "Settings") -> None:
        self.db = db
        self.artifacts = artifacts
        self.settings = settings

    def _find(self, user_id: uuid.UUID, action: str) -> User | None:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "Record lookup failed: operation=%s user_id=%s reason=%s",
                action,
                user_id,
                str(e)[:500],
                extra={"operation": action, "user_id": str(user_id), "reason": str(e)[:500]},
            )
            raise _storage_error(e, action) from e

    def _hash(self, password: str) -> str:
        try:
            return hash_password(password)
        except HashingError as e:
            logger.error("Password hashing failed: reason=%s", e.message, extra={"reason": e.message})
            raise InternalError("failed to hash password") from e

    def create_user(self, encoded_payload: str) -> str:
        """
        Insert a user and write its artifact. Returns the assigned id.

        The lookup before insert only gives an early conflict; the primary key
        constraint is what actually rejects a duplicate id. If the artifact
        write fails the new row is deleted again (when compensation is enabled)
        and ArtifactError is raised either way.
        """
        logger.info("Creating a new user")
        payload = decode_user_payload(encoded_payload)

        requested_id: uuid.UUID | None = None
        if payload.id:
            try:
                requested_id = uuid.UUID(payload.id)
            except ValueError:
                raise ValidationError("invalid id") from None
            if self._find(requested_id, "create user") is not None:
                raise ConflictError("user already exists")

        row = User(id=requested_id) if requested_id else User()
        _apply_payload(row, payload, self._hash(payload.password))

        try:
            self.db.add(row)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("user already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "User insert failed: reason=%s",
                str(e)[:500],
                extra={"operation": "create", "reason": str(e)[:500]},
            )
            raise _storage_error(e, "create user") from e

        user_id = str(row.id)
        try:
            self.artifacts.write(user_id, payload.data)
        except OSError as e:
            self._compensate_create(row, user_id, e)
            raise ArtifactError("failed to create user file") from e

        logger.info("User created: user_id=%s", user_id, extra={"operation": "create", "user_id": user_id})
        return user_id

    def _compensate_create(self, row: User, user_id: str, cause: OSError) -> None:
        if not self.settings.CREATE_COMPENSATION_ENABLED:
            logger.error(
                "Artifact write failed; record left without artifact: user_id=%s reason=%s",
                user_id,
                cause,
                extra={"operation": "create", "user_id": user_id, "reason": str(cause)},
            )
            return
        try:
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "Artifact write failed and record rollback failed; manual reconciliation needed: "
                "user_id=%s reason=%s",
                user_id,
                str(e)[:500],
                extra={"operation": "create", "user_id": user_id, "reason": str(e)[:500]},
            )
            return
        logger.warning(
            "Artifact write failed; inserted record removed: user_id=%s reason=%s",
            user_id,
            cause,
            extra={"operation": "create", "user_id": user_id, "reason": str(cause)},
        )

    def login(self, raw_id: str, password: str) -> str:
        """
        Check credentials and return an opaque token.

        Every failure is an AuthError so callers only see the 401 family.
        The token is not stored anywhere.
        """
        logger.info("Logging user in")
        user_id = parse_user_id(raw_id)
        try:
            row = self._find(user_id, "log in")
        except StorageError as e:
            raise AuthError("invalid credentials") from e
        if row is None:
            raise AuthError("no such user")
        if not verify_password(password, row.password):
            raise AuthError("invalid credentials")
        return generate_default_token()

    def get_user(self, raw_id: str) -> UserRecord:
        logger.info("Getting user by id")
        user_id = parse_user_id(raw_id)
        row = self._find(user_id, "get user")
        if row is None:
            raise NotFoundError("user not found")
        return UserRecord.model_validate(row)

    def list_users(self) -> list[UserRecord]:
        """All users in store order. One undecodable row fails the whole listing."""
        logger.info("Listing users")
        try:
            rows = self.db.scalars(select(User)).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise _storage_error(e, "list users") from e
        users: list[UserRecord] = []
        for row in rows:
            try:
                users.append(UserRecord.model_validate(row))
            except PydanticValidationError as e:
                logger.error(
                    "Stored user could not be decoded: user_id=%s",
                    row.id,
                    extra={"operation": "list", "user_id": str(row.id), "reason": str(e)[:500]},
                )
                raise InternalError("failed to decode user") from e
        return users

    def update_user(self, raw_id: str, encoded_payload: str) -> None:
        """
        Replace every field of an existing user except its id.

        The artifact is rewritten only when one already exists; a user without
        an artifact keeps having none.
        """
        logger.info("Updating user")
        user_id = parse_user_id(raw_id)
        payload = decode_user_payload(encoded_payload)
        if payload.id:
            raise ValidationError("id immutable")

        row = self._find(user_id, "update user")
        if row is None:
            raise NotFoundError("user not found")

        _apply_payload(row, payload, self._hash(payload.password))
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "User replace failed: user_id=%s reason=%s",
                user_id,
                str(e)[:500],
                extra={"operation": "update", "user_id": str(user_id), "reason": str(e)[:500]},
            )
            raise _storage_error(e, "update user") from e

        key = str(user_id)
        if not self.artifacts.exists(key):
            logger.info(
                "No artifact for user; data not written: user_id=%s",
                key,
                extra={"operation": "update", "user_id": key},
            )
            return
        try:
            self.artifacts.write(key, payload.data)
        except OSError as e:
            logger.error(
                "Artifact update failed after record replace: user_id=%s reason=%s",
                key,
                e,
                extra={"operation": "update", "user_id": key, "reason": str(e)},
            )
            raise ArtifactError("failed to update user file") from e

    def delete_user(self, raw_id: str) -> None:
        """Delete the record, then its artifact. A missing artifact is fine."""
        logger.info("Deleting user")
        user_id = parse_user_id(raw_id)
        row = self._find(user_id, "delete user")
        if row is None:
            raise NotFoundError("user not found")

        try:
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "User delete failed: user_id=%s reason=%s",
                user_id,
                str(e)[:500],
                extra={"operation": "delete", "user_id": str(user_id), "reason": str(e)[:500]},
            )
            raise _storage_error(e, "delete user") from e

        key = str(user_id)
        try:
            self.artifacts.delete(key)
        except OSError as e:
            logger.error(
                "Record deleted but artifact removal failed; manual reconciliation needed: "
                "user_id=%s reason=%s",
                key,
                e,
                extra={"operation": "delete", "user_id": key, "reason": str(e)},
            )
            raise ArtifactError("failed to delete user file") from e
