"""Shared helpers for API tests."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.models.song import Song
from beefmusic.models.user import User


@dataclass(slots=True)
class AuthContext:
    """Authenticated listener context for API tests."""

    user: dict[str, Any]
    username: str
    token: str

    @property
    def user_id(self) -> str:
        return str(self.user["id"])

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


async def register_user(client: AsyncClient, *, prefix: str = "user") -> AuthContext:
    """Register a new listener and return a bearer-token context.

    Callers pass ``headers`` explicitly so several users can share one client;
    the auth cookie set by the last registration is cleared.
    """
    username = f"{prefix}_{uuid.uuid4().hex[:8]}"
    res = await client.post("/api/auth/register", json={"username": username, "password": "supersecret"})
    assert res.status_code == 201
    client.cookies.clear()
    payload = res.json()
    return AuthContext(user=payload["user"], username=username, token=payload["access_token"])


async def admin_headers(client: AsyncClient, credentials: dict[str, str]) -> dict[str, str]:
    res = await client.post("/api/auth/admin/login", json=credentials)
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


async def make_song(session: AsyncSession, *, title: str = "Beef", genre: str | None = "Dembow") -> Song:
    song = Song(title=title, genre=genre, author="BeefMusic")
    session.add(song)
    await session.commit()
    return song


async def make_user(session: AsyncSession, username: str | None = None) -> User:
    user = User(username=username or f"listener_{uuid.uuid4().hex[:8]}", hashed_password="x")
    session.add(user)
    await session.commit()
    return user
