"""Public song requests, suggestions, and problem reports."""

from __future__ import annotations

import uuid

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.models.submission import ProblemReport, RequestStatus, SongRequest, Suggestion
from beefmusic.schema.submission import MessageCreate, SongRequestCreate
from beefmusic.services import notification_service


def _clean_nick(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


async def create_song_request(session: AsyncSession, payload: SongRequestCreate) -> SongRequest:
    """Store a song request and notify the requests channel."""
    request = SongRequest(nick=payload.nick.strip(), style=payload.style.strip(), idea=payload.idea.strip())
    session.add(request)
    await session.commit()
    await session.refresh(request)
    await notification_service.notify(
        "requests",
        notification_service.format_song_request(request.nick, request.style, request.idea, request.id),
    )
    return request


async def list_song_requests(session: AsyncSession) -> list[SongRequest]:
    result = await session.execute(select(SongRequest).order_by(SongRequest.created_at.desc()))
    return result.scalars().all()


async def update_song_request_status(
    session: AsyncSession, request_id: uuid.UUID, new_status: RequestStatus
) -> SongRequest:
    request = await session.get(SongRequest, request_id)
    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Petición no encontrada")
    request.status = new_status
    await session.commit()
    await session.refresh(request)
    return request


async def create_suggestion(session: AsyncSession, payload: MessageCreate) -> Suggestion:
    suggestion = Suggestion(nick=_clean_nick(payload.nick), message=payload.message.strip())
    session.add(suggestion)
    await session.commit()
    await session.refresh(suggestion)
    await notification_service.notify(
        "suggestions",
        notification_service.format_suggestion(suggestion.nick, suggestion.message, suggestion.id),
    )
    return suggestion


async def create_report(session: AsyncSession, payload: MessageCreate) -> ProblemReport:
    report = ProblemReport(nick=_clean_nick(payload.nick), message=payload.message.strip())
    session.add(report)
    await session.commit()
    await session.refresh(report)
    await notification_service.notify(
        "reports",
        notification_service.format_report(report.nick, report.message, report.id),
    )
    return report
