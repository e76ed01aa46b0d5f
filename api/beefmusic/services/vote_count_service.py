"""Like/dislike aggregation for one song or a page of songs."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.models.song import VoteKind
from beefmusic.services import vote_store


@dataclass(slots=True)
class VoteCounts:
    likes: int = 0
    dislikes: int = 0
    user_vote: VoteKind | None = None

    def add(self, kind: VoteKind) -> None:
        if kind == VoteKind.LIKE:
            self.likes += 1
        elif kind == VoteKind.DISLIKE:
            self.dislikes += 1


async def counts_for(session: AsyncSession, song_id: uuid.UUID) -> VoteCounts:
    """Recount a song's votes from the authoritative table."""
    per_kind = await vote_store.count_votes_for_song(session, song_id)
    return VoteCounts(likes=per_kind.get(VoteKind.LIKE, 0), dislikes=per_kind.get(VoteKind.DISLIKE, 0))


async def counts_for_all(
    session: AsyncSession,
    song_ids: Iterable[uuid.UUID],
    *,
    viewer_id: uuid.UUID | None = None,
) -> dict[uuid.UUID, VoteCounts]:
    """Aggregate counts for many songs with a single pass over their votes.

    Every requested song gets an entry, zeroed when it has no votes. When a
    viewer is given, each entry also records that viewer's own vote kind.
    The returned mapping is built per call and must not be cached.
    """
    ids = list(song_ids)
    tallies = {song_id: VoteCounts() for song_id in ids}
    for song_id, user_id, kind in await vote_store.list_votes_for_songs(session, ids):
        tally = tallies.get(song_id)
        if tally is None:
            continue
        tally.add(kind)
        if viewer_id is not None and user_id == viewer_id:
            tally.user_vote = kind
    return tallies
