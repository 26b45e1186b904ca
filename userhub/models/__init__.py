"""SQLAlchemy ORM models."""

from userhub.models.base import Base
from userhub.models.user import User

__all__ = ["Base", "User"]
