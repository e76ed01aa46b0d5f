"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import auth, songs, submissions, users

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, tags=["users"])
api_router.include_router(songs.router, prefix="/songs", tags=["songs"])
api_router.include_router(submissions.router, tags=["submissions"])
