"""Song catalog and voting schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from beefmusic.models.song import SongStatus, VoteKind
from beefmusic.schema.base import CamelModel


class SongCreate(BaseModel):
    """Admin payload for publishing a song to the catalog."""
    title: str = Field(min_length=1)
    genre: str = Field(min_length=1)
    author: str = Field(min_length=1)
    duration: str | None = None
    description: str | None = None
    status: SongStatus = SongStatus.PUBLISHED
    audio_url: str | None = None


class SongRead(CamelModel):
    id: UUID
    title: str
    genre: str | None = None
    duration: str | None = None
    description: str | None = None
    author: str
    status: SongStatus
    audio_url: str | None = None
    created_at: datetime


class SongWithVotesRead(SongRead):
    """Catalog entry augmented with vote counts and the caller's own vote."""
    likes: int = 0
    dislikes: int = 0
    user_vote: VoteKind | None = None


class VoteCreate(BaseModel):
    """Vote action; the kind is validated by the vote service."""
    kind: str


class VoteResult(CamelModel):
    message: str = "Voto registrado"
    likes: int
    dislikes: int
    user_vote: VoteKind | None = None
