"""ORM model for user accounts."""

import uuid

from sqlalchemy import JSON, Boolean, Column, Float, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB

from userhub.models.base import Base

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests).
JSONType = JSON().with_variant(JSONB(), "postgresql")


class User(Base):
    """
    User account. The primary key doubles as the artifact key (<id>.txt).

    password always holds a bcrypt hash, never the submitted credential.
    friends is a list of {"id": int, "name": str} owned by this row.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    password = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)
    balance = Column(Text, nullable=False, default="")
    age = Column(Text, nullable=False, default="")
    name = Column(Text, nullable=False, default="")
    gender = Column(Text, nullable=False, default="")
    company = Column(Text, nullable=False, default="")
    email = Column(Text, nullable=False, default="")
    phone = Column(Text, nullable=False, default="")
    address = Column(Text, nullable=False, default="")
    about = Column(Text, nullable=False, default="")
    registered = Column(Text, nullable=False, default="")
    latitude = Column(Float, nullable=False, default=0.0)
    longitude = Column(Float, nullable=False, default=0.0)
    tags = Column(JSONType, nullable=False, default=list)
    friends = Column(JSONType, nullable=False, default=list)
    data = Column(Text, nullable=False, default="")
