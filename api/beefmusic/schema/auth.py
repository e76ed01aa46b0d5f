"""Authentication-related response schemas."""

from pydantic import BaseModel

from beefmusic.schema.user import UserRead


class TokenRead(BaseModel):
    """Access token returned after user auth."""
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class AdminTokenRead(BaseModel):
    """Access token returned after admin auth."""
    access_token: str
    token_type: str = "bearer"
