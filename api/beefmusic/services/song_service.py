"""Song catalog services and the vote-augmented public listing."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.models.song import Song
from beefmusic.schema.song import SongCreate, SongRead, SongWithVotesRead
from beefmusic.services import vote_count_service, vote_store


async def create_song(session: AsyncSession, payload: SongCreate) -> Song:
    """Publish a song to the catalog."""
    song = Song(
        title=payload.title.strip(),
        genre=payload.genre.strip(),
        author=payload.author.strip(),
        duration=payload.duration,
        description=payload.description,
        status=payload.status,
        audio_url=payload.audio_url,
    )
    session.add(song)
    await session.commit()
    await session.refresh(song)
    return song


async def list_songs(session: AsyncSession) -> list[Song]:
    """List catalog songs newest first; store failures raise VoteStoreError."""
    with vote_store.store_errors("listing songs"):
        result = await session.execute(select(Song).order_by(Song.created_at.desc()))
        return result.scalars().all()


async def list_songs_with_votes(
    session: AsyncSession, *, viewer_id: uuid.UUID | None = None
) -> list[SongWithVotesRead]:
    """List songs with like/dislike counts and the viewer's own vote."""
    songs = await list_songs(session)
    if not songs:
        return []
    tallies = await vote_count_service.counts_for_all(session, [song.id for song in songs], viewer_id=viewer_id)
    listing: list[SongWithVotesRead] = []
    for song in songs:
        tally = tallies[song.id]
        listing.append(
            SongWithVotesRead(
                **SongRead.model_validate(song).model_dump(),
                likes=tally.likes,
                dislikes=tally.dislikes,
                user_vote=tally.user_vote,
            )
        )
    return listing
