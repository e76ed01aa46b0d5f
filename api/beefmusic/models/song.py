"""Song catalog and per-user vote records."""

from __future__ import annotations

import enum
import typing
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from beefmusic.db.base_class import Base

if typing.TYPE_CHECKING:  # pragma: no cover
    from beefmusic.models.user import User


class VoteKind(str, enum.Enum):
    """The two mutually exclusive stances a user can hold on a song."""
    LIKE = "like"
    DISLIKE = "dislike"


class SongStatus(str, enum.Enum):
    """Publication status for catalog songs."""
    PUBLISHED = "publicada"
    DRAFT = "borrador"


class Song(Base):
    """Published track that listeners can vote on."""
    __tablename__ = "songs"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # Free text; grouped through the genre normalizer, never trusted as a key.
    genre: Mapped[str | None] = mapped_column(String(120))
    duration: Mapped[str | None] = mapped_column(String(32))
    description: Mapped[str | None] = mapped_column(Text)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[SongStatus] = mapped_column(
        Enum(SongStatus, name="song_status", values_callable=lambda enum_cls: [e.value for e in enum_cls]),
        default=SongStatus.PUBLISHED,
        nullable=False,
    )
    audio_url: Mapped[str | None] = mapped_column(String(1024))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, index=True)

    votes: Mapped[list["SongVote"]] = relationship(back_populates="song", cascade="all, delete-orphan")


class SongVote(Base):
    """A user's current stance on one song; absence of a row means no vote."""
    __tablename__ = "song_votes"
    __table_args__ = (UniqueConstraint("user_id", "song_id", name="uq_user_song_vote"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    song_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("songs.id", ondelete="CASCADE"), index=True, nullable=False
    )
    kind: Mapped[VoteKind] = mapped_column(
        Enum(VoteKind, name="vote_kind", values_callable=lambda enum_cls: [e.value for e in enum_cls]),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow
    )

    user: Mapped["User"] = relationship(back_populates="votes")
    song: Mapped["Song"] = relationship(back_populates="votes")
