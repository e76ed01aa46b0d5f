"""Sound profile derivation from a user's votes.

Implementation notes:
- Genre percentages weigh likes only once the user has liked anything;
  before that, every vote counts toward its genre.
- Ties in percent keep the order genres were first met while scanning votes.
- Percentages round half away from zero and are not forced to sum to 100.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.models.song import VoteKind
from beefmusic.services import genre_service, vote_store

EMPTY_MOOD_LABEL = "Aún sin datos suficientes"
EMPTY_MOOD_TAGS = ("dale like o dislike a alguna canción",)
EXPLORING_MOOD_LABEL = "Explorando sonidos"
AGGRESSIVE_GENRES = frozenset({"Trap", "Drill", "Dembow", "Rap"})

HARSH_TOXICITY = 70
PICKY_TOXICITY = 40
VETERAN_VOTES = 50
NEWCOMER_VOTES = 10


@dataclass(slots=True)
class GenreStat:
    name: str
    likes: int = 0
    dislikes: int = 0
    percent: int = 0


@dataclass(frozen=True, slots=True)
class Badge:
    icon: str
    label: str


@dataclass(slots=True)
class SoundProfile:
    username: str | None
    toxicity: int
    total_votes: int
    total_likes: int
    total_dislikes: int
    genres: list[GenreStat] = field(default_factory=list)
    dominant_genre: str | None = None
    mood_label: str = EMPTY_MOOD_LABEL
    mood_tags: list[str] = field(default_factory=list)
    badges: list[Badge] = field(default_factory=list)


def round_percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    ratio = Decimal(part) * 100 / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def mood_label_for(toxicity: int, dominant_genre: str | None) -> str:
    if not dominant_genre:
        return EXPLORING_MOOD_LABEL
    if toxicity >= HARSH_TOXICITY:
        if dominant_genre in AGGRESSIVE_GENRES:
            return "Modo demonio nocturno"
        return "Crítico profesional de Spotify"
    if toxicity >= PICKY_TOXICITY:
        return f"Selectivo con el {dominant_genre}"
    return f"Buen rollo con el {dominant_genre}"


def mood_tags_for(toxicity: int, dominant_genre: str | None, total_votes: int) -> list[str]:
    tags: list[str] = []
    if dominant_genre:
        tags.append(f"fan del {dominant_genre.lower()}")
    if toxicity >= HARSH_TOXICITY:
        tags.extend(["hater fino", "no compro cualquier tema"])
    elif toxicity >= PICKY_TOXICITY:
        tags.extend(["exigente", "o me flipa o nada"])
    else:
        tags.extend(["flow chill", "mente abierta"])
    if total_votes >= VETERAN_VOTES:
        tags.append("usuario veterano")
    if total_votes < NEWCOMER_VOTES:
        tags.append("recién llegado")
    return tags


def badges_for(total_votes: int, total_likes: int, total_dislikes: int, dominant_genre: str | None) -> list[Badge]:
    badges: list[Badge] = []
    if total_votes >= 1:
        badges.append(Badge("🔥", "Primer beef votado"))
    if total_likes >= 10:
        badges.append(Badge("🎧", "10 canciones que te han volado la cabeza"))
    if total_likes >= 30 and dominant_genre:
        badges.append(Badge("🖤", f"Fan oficial del {dominant_genre}"))
    if total_dislikes >= 10:
        badges.append(Badge("💣", "Hater elegante (10 no me gusta)"))
    return badges


def empty_profile(username: str | None = None) -> SoundProfile:
    return SoundProfile(
        username=username,
        toxicity=0,
        total_votes=0,
        total_likes=0,
        total_dislikes=0,
        mood_label=EMPTY_MOOD_LABEL,
        mood_tags=list(EMPTY_MOOD_TAGS),
    )


def build_profile(votes: Iterable[tuple[VoteKind, str | None]], username: str | None = None) -> SoundProfile:
    """Derive a sound profile from (vote kind, raw song genre) pairs in scan order."""
    buckets: dict[str, GenreStat] = {}
    total_votes = total_likes = total_dislikes = 0
    for kind, raw_genre in votes:
        genre = genre_service.normalize(raw_genre)
        bucket = buckets.get(genre.key)
        if bucket is None:
            bucket = buckets[genre.key] = GenreStat(name=genre.label)
        if kind == VoteKind.LIKE:
            bucket.likes += 1
            total_likes += 1
        elif kind == VoteKind.DISLIKE:
            bucket.dislikes += 1
            total_dislikes += 1
        total_votes += 1

    if total_votes == 0:
        return empty_profile(username)

    base = total_likes if total_likes > 0 else total_votes
    for bucket in buckets.values():
        weight = bucket.likes if total_likes > 0 else bucket.likes + bucket.dislikes
        bucket.percent = round_percent(weight, base)
    # sorted() is stable, so equal percents keep first-seen order.
    genres = sorted(buckets.values(), key=lambda stat: stat.percent, reverse=True)

    dominant_genre = genres[0].name if genres else None
    toxicity = round_percent(total_dislikes, total_votes)
    return SoundProfile(
        username=username,
        toxicity=toxicity,
        total_votes=total_votes,
        total_likes=total_likes,
        total_dislikes=total_dislikes,
        genres=genres,
        dominant_genre=dominant_genre,
        mood_label=mood_label_for(toxicity, dominant_genre),
        mood_tags=mood_tags_for(toxicity, dominant_genre, total_votes),
        badges=badges_for(total_votes, total_likes, total_dislikes, dominant_genre),
    )


async def profile_for(session: AsyncSession, user_id: uuid.UUID, *, username: str | None = None) -> SoundProfile:
    """Compute the user's sound profile on demand; store failures propagate."""
    votes = await vote_store.list_votes_for_user(session, user_id)
    if not votes:
        return empty_profile(username)
    genres = await vote_store.get_song_genres(session, (song_id for song_id, _ in votes))
    return build_profile(((kind, genres.get(song_id)) for song_id, kind in votes), username)
