"""API tests for song listing, publishing, and voting."""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from beefmusic.tests.utils import admin_headers, make_song, register_user


@pytest.mark.asyncio
async def test_vote_end_to_end_scenario(client, session):
    song = await make_song(session, title="S1")
    first = await register_user(client, prefix="u1")
    second = await register_user(client, prefix="u2")
    url = f"/api/songs/{song.id}/vote"

    res = await client.post(url, json={"kind": "like"}, headers=first.headers)
    assert res.status_code == 200
    assert {k: res.json()[k] for k in ("likes", "dislikes", "userVote")} == {
        "likes": 1,
        "dislikes": 0,
        "userVote": "like",
    }

    res = await client.post(url, json={"kind": "dislike"}, headers=second.headers)
    assert {k: res.json()[k] for k in ("likes", "dislikes", "userVote")} == {
        "likes": 1,
        "dislikes": 1,
        "userVote": "dislike",
    }

    res = await client.post(url, json={"kind": "like"}, headers=first.headers)
    assert {k: res.json()[k] for k in ("likes", "dislikes", "userVote")} == {
        "likes": 0,
        "dislikes": 1,
        "userVote": None,
    }


@pytest.mark.asyncio
async def test_vote_rejects_bad_kind_unknown_song_and_anonymous_callers(client, session):
    song = await make_song(session)
    auth = await register_user(client, prefix="voter")

    bad_kind = await client.post(f"/api/songs/{song.id}/vote", json={"kind": "love"}, headers=auth.headers)
    assert bad_kind.status_code == 422
    assert "like" in bad_kind.json()["detail"]

    missing = await client.post(f"/api/songs/{uuid.uuid4()}/vote", json={"kind": "like"}, headers=auth.headers)
    assert missing.status_code == 404

    anonymous = await client.post(f"/api/songs/{song.id}/vote", json={"kind": "like"})
    assert anonymous.status_code == 401


@pytest.mark.asyncio
async def test_listing_includes_counts_and_viewer_vote(client, session):
    older = await make_song(session, title="Older", genre="Trap")
    newer = await make_song(session, title="Newer", genre="Drill")
    voter = await register_user(client, prefix="lister")
    await client.post(f"/api/songs/{older.id}/vote", json={"kind": "dislike"}, headers=voter.headers)

    anonymous = await client.get("/api/songs")
    assert anonymous.status_code == 200
    songs = anonymous.json()
    assert [song["title"] for song in songs] == ["Newer", "Older"]
    assert songs[1]["dislikes"] == 1
    assert all(song["userVote"] is None for song in songs)

    personal = await client.get("/api/songs", headers=voter.headers)
    by_id = {song["id"]: song for song in personal.json()}
    assert by_id[str(older.id)]["userVote"] == "dislike"
    assert by_id[str(newer.id)]["userVote"] is None
    assert by_id[str(newer.id)]["likes"] == 0


@pytest.mark.asyncio
async def test_listing_treats_invalid_tokens_as_anonymous(client, session):
    await make_song(session)
    res = await client.get("/api/songs", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 200
    assert res.json()[0]["userVote"] is None


@pytest.mark.asyncio
async def test_admin_publishes_songs(client, admin_credentials):
    payload = {"title": "Beef Nocturno", "genre": "Drill", "author": "Beef", "duration": "2:45"}

    listener = await register_user(client, prefix="nonadmin")
    forbidden = await client.post("/api/songs", json=payload, headers=listener.headers)
    assert forbidden.status_code == 403

    headers = await admin_headers(client, admin_credentials)
    created = await client.post("/api/songs", json=payload, headers=headers)
    assert created.status_code == 201
    body = created.json()
    assert body["title"] == "Beef Nocturno"
    assert body["status"] == "publicada"

    listing = await client.get("/api/songs")
    assert listing.json()[0]["likes"] == 0


@pytest.mark.asyncio
async def test_listing_store_failure_returns_503(client, session, monkeypatch):
    await make_song(session, title="Caído")

    async def _broken_execute(*args, **kwargs):
        raise OperationalError("SELECT songs", {}, Exception("database unavailable"))

    monkeypatch.setattr(session, "execute", _broken_execute)

    res = await client.get("/api/songs")
    assert res.status_code == 503
    assert res.json()["detail"] == "Error al obtener las canciones"
