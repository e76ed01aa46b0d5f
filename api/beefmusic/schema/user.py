"""User request/response schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from beefmusic.schema.base import ORMModel


class UserCreate(BaseModel):
    """Payload for registering a new user."""
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=6)


class UserLogin(BaseModel):
    """Payload for user and admin login requests."""
    username: str
    password: str


class UserRead(ORMModel):
    """User profile fields exposed in API responses."""
    id: UUID
    username: str
    created_at: datetime
