"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status plus reachability of both stores a user lives in."""

    status: Literal["ok", "degraded"] = Field(default="ok")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"]
    artifacts: Literal["writable", "unwritable"]
