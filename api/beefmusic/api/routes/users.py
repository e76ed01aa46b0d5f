"""User endpoints for the current listener and their sound profile."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.api.deps import get_current_user, get_db
from beefmusic.models.user import User
from beefmusic.schema.sound_profile import SoundProfileRead
from beefmusic.schema.user import UserRead
from beefmusic.services import sound_profile_service
from beefmusic.services.vote_store import VoteStoreError

router = APIRouter()


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: User = Depends(get_current_user)) -> User:
    """Return the current authenticated user."""
    return current_user


@router.get("/me/sound-profile", response_model=SoundProfileRead)
async def read_sound_profile(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> SoundProfileRead:
    """Derive the current user's sound profile from their votes."""
    try:
        profile = await sound_profile_service.profile_for(session, current_user.id, username=current_user.username)
    except VoteStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Error obteniendo el perfil sonoro"
        ) from exc
    return SoundProfileRead.model_validate(profile)
