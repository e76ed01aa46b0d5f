"""User model with authentication and vote ownership."""

from __future__ import annotations

import typing
import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from beefmusic.db.base_class import Base

if typing.TYPE_CHECKING:  # pragma: no cover
    from beefmusic.models.song import SongVote


class User(Base):
    """Registered listener who can vote on songs."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)

    votes: Mapped[list["SongVote"]] = relationship(back_populates="user", cascade="all, delete-orphan")
