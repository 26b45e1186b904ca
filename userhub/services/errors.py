"""Account operation errors. Each carries the HTTP status the API layer answers with."""


class AccountError(Exception):
    """Base class for failures raised by the account service."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AccountError):
    """Malformed or illegal input (client fault)."""

    status_code = 400


class ConflictError(AccountError):
    """A user with the same id already exists."""

    status_code = 409


class NotFoundError(AccountError):
    status_code = 404


class AuthError(AccountError):
    """Bad id format or credential mismatch. Deliberately coarse for login."""

    status_code = 401


class StorageError(AccountError):
    """Record store failure, including statement timeouts."""

    status_code = 500


class ArtifactError(AccountError):
    """Artifact store failure."""

    status_code = 500


class InternalError(AccountError):
    """Hashing or decoding fault not attributable to the caller."""

    status_code = 500
