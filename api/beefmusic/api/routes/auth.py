from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.api.deps import get_db
from beefmusic.core.config import settings
from beefmusic.core.security import create_access_token, create_admin_token
from beefmusic.schema.auth import AdminTokenRead, TokenRead
from beefmusic.schema.user import UserCreate, UserLogin, UserRead
from beefmusic.services import user_service

router = APIRouter()

ACCESS_COOKIE_NAME = "access_token"


def set_auth_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        ACCESS_COOKIE_NAME,
        access_token,
        max_age=settings.access_token_expires_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.environment.lower() == "production",
        path="/",
    )


def _token_response(user: UserRead) -> TokenRead:
    return TokenRead(access_token=create_access_token(str(user.id), user.username), user=user)


@router.post("/register", response_model=TokenRead, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, response: Response, session: AsyncSession = Depends(get_db)) -> TokenRead:
    user = await user_service.create_user(session, username=payload.username, password=payload.password)
    tokens = _token_response(UserRead.model_validate(user))
    set_auth_cookie(response, tokens.access_token)
    return tokens


@router.post("/login", response_model=TokenRead)
async def login(payload: UserLogin, response: Response, session: AsyncSession = Depends(get_db)) -> TokenRead:
    user = await user_service.authenticate_user(session, payload.username, payload.password)
    tokens = _token_response(UserRead.model_validate(user))
    set_auth_cookie(response, tokens.access_token)
    return tokens


@router.post("/admin/login", response_model=AdminTokenRead)
async def admin_login(payload: UserLogin) -> AdminTokenRead:
    user_service.authenticate_admin(payload.username, payload.password)
    return AdminTokenRead(access_token=create_admin_token())
