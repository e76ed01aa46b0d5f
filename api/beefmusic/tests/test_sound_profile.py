"""Sound profile derivation tests."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from beefmusic.models.song import SongVote, VoteKind
from beefmusic.services import sound_profile_service, vote_service
from beefmusic.services.sound_profile_service import build_profile, round_percent
from beefmusic.tests.utils import make_song, make_user, register_user

LIKE = VoteKind.LIKE
DISLIKE = VoteKind.DISLIKE


def test_zero_votes_yield_the_empty_profile():
    profile = build_profile([], username="nobody")
    assert profile.total_votes == 0
    assert profile.genres == []
    assert profile.dominant_genre is None
    assert profile.badges == []
    assert profile.mood_label == "Aún sin datos suficientes"
    assert profile.mood_tags == ["dale like o dislike a alguna canción"]


def test_toxicity_counts_dislikes_over_all_votes():
    votes = [(LIKE, "Pop")] * 3 + [(DISLIKE, "Pop")] * 7
    profile = build_profile(votes)
    assert profile.total_votes == 10
    assert profile.toxicity == 70


def test_dominant_genre_uses_likes_only_once_any_like_exists():
    profile = build_profile([(LIKE, "Dembow"), (LIKE, "dembow"), (DISLIKE, "Trap")])

    assert profile.dominant_genre == "Dembow"
    stats = {stat.name: stat for stat in profile.genres}
    assert stats["Dembow"].percent == 100
    assert stats["Dembow"].likes == 2
    assert stats["Trap"].percent == 0
    assert stats["Trap"].dislikes == 1
    assert [stat.name for stat in profile.genres] == ["Dembow", "Trap"]


def test_without_likes_participation_ranks_genres():
    profile = build_profile([(DISLIKE, "Drill"), (DISLIKE, "Pop"), (DISLIKE, "pop")])
    assert [(stat.name, stat.percent) for stat in profile.genres] == [("Pop", 67), ("Drill", 33)]
    assert profile.toxicity == 100
    assert profile.mood_label == "Crítico profesional de Spotify"


def test_ties_keep_first_encountered_order():
    profile = build_profile([(LIKE, "Trap"), (LIKE, "Rap"), (LIKE, "Pop"), (LIKE, "Rap")])
    assert [stat.name for stat in profile.genres] == ["Rap", "Trap", "Pop"]

    tied = build_profile([(LIKE, "Trap"), (LIKE, "Rap")])
    assert [stat.name for stat in tied.genres] == ["Trap", "Rap"]
    assert [stat.percent for stat in tied.genres] == [50, 50]


def test_missing_genre_goes_to_unknown_bucket():
    profile = build_profile([(LIKE, None), (LIKE, "")])
    assert [(stat.name, stat.likes) for stat in profile.genres] == [("Unknown", 2)]


def test_rounding_is_half_away_from_zero():
    assert round_percent(1, 8) == 13
    assert round_percent(1, 200) == 1
    assert round_percent(1, 3) == 33
    assert round_percent(2, 3) == 67
    assert round_percent(5, 0) == 0


@pytest.mark.parametrize(
    ("toxicity", "genre", "label"),
    [
        (0, None, "Explorando sonidos"),
        (70, "Drill", "Modo demonio nocturno"),
        (85, "Pop", "Crítico profesional de Spotify"),
        (40, "Trap", "Selectivo con el Trap"),
        (69, "Pop", "Selectivo con el Pop"),
        (39, "Dembow", "Buen rollo con el Dembow"),
    ],
)
def test_mood_label_bands(toxicity, genre, label):
    assert sound_profile_service.mood_label_for(toxicity, genre) == label


def test_mood_tags_bands_and_volume():
    assert sound_profile_service.mood_tags_for(10, "Trap", 3) == [
        "fan del trap",
        "flow chill",
        "mente abierta",
        "recién llegado",
    ]
    assert sound_profile_service.mood_tags_for(50, "Pop", 20) == ["fan del pop", "exigente", "o me flipa o nada"]
    assert sound_profile_service.mood_tags_for(75, "Rap", 60) == [
        "fan del rap",
        "hater fino",
        "no compro cualquier tema",
        "usuario veterano",
    ]


def test_badges_unlock_at_thresholds():
    votes = [(LIKE, "Dembow")] * 30 + [(DISLIKE, "Pop")] * 10
    profile = build_profile(votes)
    assert [badge.icon for badge in profile.badges] == ["🔥", "🎧", "🖤", "💣"]
    assert profile.badges[2].label == "Fan oficial del Dembow"

    starter = build_profile([(LIKE, "Trap")])
    assert [badge.label for badge in starter.badges] == ["Primer beef votado"]


@pytest.mark.asyncio
async def test_profile_for_resolves_song_genres(session):
    user = await make_user(session)
    dembow = await make_song(session, title="Uno", genre="Dembow")
    dembow_lower = await make_song(session, title="Dos", genre=" dembow")
    trap = await make_song(session, title="Tres", genre="TRAP")
    session.add(SongVote(user_id=user.id, song_id=dembow.id, kind=VoteKind.LIKE))
    await session.commit()
    session.add(SongVote(user_id=user.id, song_id=dembow_lower.id, kind=VoteKind.LIKE))
    await session.commit()
    session.add(SongVote(user_id=user.id, song_id=trap.id, kind=VoteKind.DISLIKE))
    await session.commit()

    profile = await sound_profile_service.profile_for(session, user.id, username=user.username)

    assert profile.username == user.username
    assert (profile.total_votes, profile.total_likes, profile.total_dislikes) == (3, 2, 1)
    assert profile.dominant_genre == "Dembow"
    assert profile.toxicity == 33
    assert profile.mood_label == "Buen rollo con el Dembow"


@pytest.mark.asyncio
async def test_profile_for_ties_follow_vote_order_across_a_switch(session):
    user = await make_user(session)
    first_trap = await make_song(session, title="Uno", genre="Trap")
    rap = await make_song(session, title="Dos", genre="Rap")
    second_trap = await make_song(session, title="Tres", genre="trap")
    cast_at = datetime(2024, 1, 1, 12, 0, 0)
    for offset, song in enumerate((first_trap, rap, second_trap)):
        session.add(
            SongVote(
                user_id=user.id,
                song_id=song.id,
                kind=VoteKind.LIKE,
                created_at=cast_at + timedelta(minutes=offset),
            )
        )
    await session.commit()

    # The oldest Trap vote flips to dislike; Trap was still met first.
    outcome = await vote_service.vote(session, user.id, first_trap.id, "dislike")
    assert outcome.user_vote == VoteKind.DISLIKE

    profile = await sound_profile_service.profile_for(session, user.id)

    assert [(stat.name, stat.percent) for stat in profile.genres] == [("Trap", 50), ("Rap", 50)]
    assert profile.dominant_genre == "Trap"
    assert (profile.genres[0].likes, profile.genres[0].dislikes) == (1, 1)

    reversed_user = await make_user(session)
    for offset, song in enumerate((rap, second_trap)):
        session.add(
            SongVote(
                user_id=reversed_user.id,
                song_id=song.id,
                kind=VoteKind.LIKE,
                created_at=cast_at + timedelta(minutes=offset),
            )
        )
    await session.commit()

    reversed_profile = await sound_profile_service.profile_for(session, reversed_user.id)
    assert [stat.name for stat in reversed_profile.genres] == ["Rap", "Trap"]


@pytest.mark.asyncio
async def test_sound_profile_route(client, session):
    auth = await register_user(client, prefix="profile")

    empty = await client.get("/api/me/sound-profile", headers=auth.headers)
    assert empty.status_code == 200
    payload = empty.json()
    assert payload["totalVotes"] == 0
    assert payload["genres"] == []
    assert payload["dominantGenre"] is None
    assert payload["badges"] == []

    song = await make_song(session, genre="Reggaetón")
    vote_res = await client.post(f"/api/songs/{song.id}/vote", json={"kind": "like"}, headers=auth.headers)
    assert vote_res.status_code == 200

    res = await client.get("/api/me/sound-profile", headers=auth.headers)
    payload = res.json()
    assert payload["username"] == auth.username
    assert payload["dominantGenre"] == "Reggaetón"
    assert payload["genres"] == [{"name": "Reggaetón", "likes": 1, "dislikes": 0, "percent": 100}]
    assert payload["badges"] == [{"icon": "🔥", "label": "Primer beef votado"}]


@pytest.mark.asyncio
async def test_sound_profile_requires_auth(client):
    res = await client.get("/api/me/sound-profile")
    assert res.status_code == 401
