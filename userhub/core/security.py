"""Password hashing and opaque token issuing."""

import secrets
import string

import bcrypt

# Bcrypt cost (rounds); shared by every caller, never tuned per call.
BCRYPT_ROUNDS = 12

# 62-symbol alphabet for opaque tokens.
TOKEN_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
DEFAULT_TOKEN_LENGTH = 32


class HashingError(Exception):
    """Raised when a password hash cannot be produced."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; anything past it does not affect the digest.
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    except (OSError, ValueError) as e:
        raise HashingError(f"Could not generate salt: {e}") from e
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_token(length: int) -> str:
    """
    Return `length` characters drawn uniformly from TOKEN_ALPHABET.

    Uses the OS CSPRNG; if it is unavailable the error propagates and is not
    handled per request.
    """
    if length < 0:
        raise ValueError("token length must be non-negative")
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def generate_default_token() -> str:
    """Opaque token of DEFAULT_TOKEN_LENGTH characters."""
    return generate_token(DEFAULT_TOKEN_LENGTH)
