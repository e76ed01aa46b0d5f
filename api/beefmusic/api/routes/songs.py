"""Song catalog listing, admin publishing, and voting endpoints."""

import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.api.deps import get_current_user, get_db, get_optional_current_user, require_admin
from beefmusic.models.user import User
from beefmusic.schema.song import SongCreate, SongRead, SongWithVotesRead, VoteCreate, VoteResult
from beefmusic.services import song_service, vote_service
from beefmusic.services.vote_store import VoteStoreError

router = APIRouter()


@router.get("", response_model=list[SongWithVotesRead])
async def list_songs(
    session: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_optional_current_user),
) -> list[SongWithVotesRead]:
    """List songs newest first with vote counts and the caller's own vote."""
    viewer_id = current_user.id if current_user else None
    try:
        return await song_service.list_songs_with_votes(session, viewer_id=viewer_id)
    except VoteStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Error al obtener las canciones"
        ) from exc


@router.post("", response_model=SongRead, status_code=status.HTTP_201_CREATED)
async def create_song(
    payload: SongCreate,
    session: AsyncSession = Depends(get_db),
    _: dict[str, Any] = Depends(require_admin),
) -> SongRead:
    """Publish a song to the catalog (admin only)."""
    song = await song_service.create_song(session, payload)
    return SongRead.model_validate(song)


@router.post("/{song_id}/vote", response_model=VoteResult)
async def vote_song(
    song_id: uuid.UUID,
    payload: VoteCreate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> VoteResult:
    """Toggle the caller's like/dislike on a song and return fresh counts."""
    try:
        outcome = await vote_service.vote(session, current_user.id, song_id, payload.kind)
    except vote_service.VoteValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except vote_service.SongNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except VoteStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Error guardando el voto"
        ) from exc
    return VoteResult(likes=outcome.likes, dislikes=outcome.dislikes, user_vote=outcome.user_vote)
