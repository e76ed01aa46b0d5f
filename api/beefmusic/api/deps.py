import logging
from typing import Any

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.core.config import settings
from beefmusic.core.security import ROLE_ADMIN, ROLE_USER, decode_token
from beefmusic.db.session import get_session
from beefmusic.models.user import User
from beefmusic.services import user_service

logger = logging.getLogger("beefmusic.api.deps")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_prefix}/auth/login", auto_error=False)


async def get_db() -> AsyncSession:
    async for session in get_session():
        yield session


def _require_payload(token: str | None, access_token_cookie: str | None) -> dict[str, Any]:
    candidate = token or access_token_cookie
    if not candidate:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No autorizado")
    payload = decode_token(candidate)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token no válido o expirado")
    return payload


async def get_current_user(
    session: AsyncSession = Depends(get_db),
    token: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(default=None, alias="access_token"),
) -> User:
    payload = _require_payload(token, access_token_cookie)
    if payload.get("role") != ROLE_USER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Permisos insuficientes")
    user = await user_service.get_user_by_id(session, payload.get("sub"))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


async def get_optional_current_user(
    session: AsyncSession = Depends(get_db),
    token: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(default=None, alias="access_token"),
) -> User | None:
    """Resolve the caller if a valid user token is present; anything else is anonymous."""
    candidate = token or access_token_cookie
    if not candidate:
        return None
    payload = decode_token(candidate)
    if not payload or payload.get("role") != ROLE_USER:
        logger.debug("Ignoring unusable token on optional-auth route")
        return None
    return await user_service.get_user_by_id(session, payload.get("sub"))


async def require_admin(
    token: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(default=None, alias="access_token"),
) -> dict[str, Any]:
    payload = _require_payload(token, access_token_cookie)
    if payload.get("role") != ROLE_ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Permisos insuficientes")
    return payload
