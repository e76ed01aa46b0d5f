"""Sound (taste) profile response schemas."""

from __future__ import annotations

from pydantic import Field

from beefmusic.schema.base import CamelModel


class GenreStatRead(CamelModel):
    name: str
    likes: int
    dislikes: int
    percent: int


class BadgeRead(CamelModel):
    icon: str
    label: str


class SoundProfileRead(CamelModel):
    """Derived listener profile; always well-formed, even with zero votes."""
    username: str | None = None
    toxicity: int
    total_votes: int
    total_likes: int
    total_dislikes: int
    genres: list[GenreStatRead] = Field(default_factory=list)
    dominant_genre: str | None = None
    mood_label: str
    mood_tags: list[str] = Field(default_factory=list)
    badges: list[BadgeRead] = Field(default_factory=list)
