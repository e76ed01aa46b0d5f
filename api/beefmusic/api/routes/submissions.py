"""Public submission endpoints and the admin request queue."""

import uuid
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.api.deps import get_db, require_admin
from beefmusic.schema.submission import (
    MessageCreate,
    SongRequestCreate,
    SongRequestRead,
    SongRequestStatusUpdate,
    SubmissionCreated,
)
from beefmusic.services import submission_service

router = APIRouter()


@router.post("/requests", response_model=SubmissionCreated, status_code=status.HTTP_201_CREATED)
async def create_song_request(payload: SongRequestCreate, session: AsyncSession = Depends(get_db)) -> SubmissionCreated:
    """Submit an idea for a new song."""
    request = await submission_service.create_song_request(session, payload)
    return SubmissionCreated(message="Petición creada correctamente", id=request.id)


@router.get("/requests", response_model=list[SongRequestRead])
async def list_song_requests(
    session: AsyncSession = Depends(get_db),
    _: dict[str, Any] = Depends(require_admin),
):
    """List song requests newest first (admin only)."""
    return await submission_service.list_song_requests(session)


@router.patch("/requests/{request_id}/status", response_model=SongRequestRead)
async def update_song_request_status(
    request_id: uuid.UUID,
    payload: SongRequestStatusUpdate,
    session: AsyncSession = Depends(get_db),
    _: dict[str, Any] = Depends(require_admin),
):
    """Move a song request through the production pipeline (admin only)."""
    return await submission_service.update_song_request_status(session, request_id, payload.status)


@router.post("/suggestions", response_model=SubmissionCreated, status_code=status.HTTP_201_CREATED)
async def create_suggestion(payload: MessageCreate, session: AsyncSession = Depends(get_db)) -> SubmissionCreated:
    suggestion = await submission_service.create_suggestion(session, payload)
    return SubmissionCreated(message="Sugerencia enviada correctamente", id=suggestion.id)


@router.post("/reports", response_model=SubmissionCreated, status_code=status.HTTP_201_CREATED)
async def create_report(payload: MessageCreate, session: AsyncSession = Depends(get_db)) -> SubmissionCreated:
    report = await submission_service.create_report(session, payload)
    return SubmissionCreated(message="Reporte enviado correctamente", id=report.id)
