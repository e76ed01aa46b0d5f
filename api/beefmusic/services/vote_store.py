"""Database accessors for vote records and the song lookups voting depends on.

Invariants:
- Every SQLAlchemy failure leaves this module as VoteStoreError, except a
  rejected insert on (user_id, song_id), which becomes VoteConflictError.
- Writes are flushed, never committed; the caller owns the transaction.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Iterable, Iterator

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.models.song import Song, SongVote, VoteKind


class VoteStoreError(RuntimeError):
    """Raised when the underlying store fails; the whole operation must abort."""


class VoteConflictError(RuntimeError):
    """Raised when the uniqueness constraint rejects a concurrent duplicate vote."""


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise VoteConflictError(f"Conflict while {action}") from exc
    except SQLAlchemyError as exc:
        raise VoteStoreError(f"Store failure while {action}") from exc


async def song_exists(session: AsyncSession, song_id: uuid.UUID) -> bool:
    with store_errors("looking up song"):
        result = await session.execute(select(Song.id).where(Song.id == song_id))
        return result.scalar_one_or_none() is not None


async def get_vote(session: AsyncSession, user_id: uuid.UUID, song_id: uuid.UUID) -> SongVote | None:
    """Return the stored vote for a (user, song) pair, if any."""
    with store_errors("reading vote"):
        result = await session.execute(
            select(SongVote)
            .execution_options(populate_existing=True)
            .where(SongVote.user_id == user_id, SongVote.song_id == song_id)
        )
        return result.scalar_one_or_none()


async def put_vote(
    session: AsyncSession,
    user_id: uuid.UUID,
    song_id: uuid.UUID,
    kind: VoteKind,
    *,
    existing: SongVote | None = None,
) -> SongVote:
    """Create the pair's vote, or switch the kind of an existing one."""
    with store_errors("writing vote"):
        if existing is not None:
            existing.kind = kind
            await session.flush()
            return existing
        vote = SongVote(user_id=user_id, song_id=song_id, kind=kind)
        session.add(vote)
        await session.flush()
        return vote


async def delete_vote(session: AsyncSession, vote: SongVote) -> None:
    with store_errors("deleting vote"):
        await session.delete(vote)
        await session.flush()


async def count_votes_for_song(session: AsyncSession, song_id: uuid.UUID) -> dict[VoteKind, int]:
    """Count the song's vote records per kind, straight from the table."""
    with store_errors("counting votes"):
        result = await session.execute(
            select(SongVote.kind, func.count(SongVote.id))
            .where(SongVote.song_id == song_id)
            .group_by(SongVote.kind)
        )
        return {row[0]: int(row[1]) for row in result.all()}


async def list_votes_for_songs(
    session: AsyncSession, song_ids: Iterable[uuid.UUID]
) -> list[tuple[uuid.UUID, uuid.UUID, VoteKind]]:
    """Return (song_id, user_id, kind) for every vote on the given songs."""
    ids = list(song_ids)
    if not ids:
        return []
    with store_errors("listing song votes"):
        result = await session.execute(
            select(SongVote.song_id, SongVote.user_id, SongVote.kind).where(SongVote.song_id.in_(ids))
        )
        return [(row[0], row[1], row[2]) for row in result.all()]


async def list_votes_for_user(session: AsyncSession, user_id: uuid.UUID) -> list[tuple[uuid.UUID, VoteKind]]:
    """Return (song_id, kind) for the user's votes in the order they were cast."""
    with store_errors("listing user votes"):
        result = await session.execute(
            select(SongVote.song_id, SongVote.kind)
            .where(SongVote.user_id == user_id)
            .order_by(SongVote.created_at.asc(), SongVote.id.asc())
        )
        return [(row[0], row[1]) for row in result.all()]


async def get_song_genres(session: AsyncSession, song_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, str | None]:
    """Resolve raw genre labels for a batch of songs in one query."""
    ids = list(set(song_ids))
    if not ids:
        return {}
    with store_errors("resolving song genres"):
        result = await session.execute(select(Song.id, Song.genre).where(Song.id.in_(ids)))
        return {row[0]: row[1] for row in result.all()}


async def commit(session: AsyncSession) -> None:
    with store_errors("committing vote"):
        await session.commit()


async def rollback(session: AsyncSession) -> None:
    with store_errors("rolling back vote"):
        await session.rollback()
