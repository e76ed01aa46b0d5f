"""Schemas for public song requests, suggestions, and problem reports."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from beefmusic.models.submission import RequestStatus
from beefmusic.schema.base import ORMModel


class SongRequestCreate(BaseModel):
    nick: str = Field(min_length=1)
    style: str = Field(min_length=1)
    idea: str = Field(min_length=1)


class SongRequestRead(ORMModel):
    id: UUID
    nick: str
    style: str
    idea: str
    status: RequestStatus
    created_at: datetime


class SongRequestStatusUpdate(BaseModel):
    status: RequestStatus


class MessageCreate(BaseModel):
    """Free-form message used for suggestions and problem reports."""
    nick: str | None = None
    message: str = Field(min_length=1)


class SubmissionCreated(BaseModel):
    message: str
    id: UUID
