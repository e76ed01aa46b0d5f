"""FastAPI application entrypoint and health reporting."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from beefmusic.api.router import api_router
from beefmusic.core.config import settings
from beefmusic.db.session import init_models

logger = logging.getLogger("beefmusic.main")

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.api_prefix)


@app.on_event("startup")
async def _create_tables() -> None:
    """Create missing tables on startup."""
    await init_models()
    logger.info("%s ready (%s)", settings.app_name, settings.environment)


@app.get("/health", tags=["internal"])
@app.get(f"{settings.api_prefix}/health", tags=["internal"])
async def health() -> dict[str, str]:
    return {"status": "ok"}
