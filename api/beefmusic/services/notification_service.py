"""Chat notifications for public submissions.

Notification failures are logged and never fail the submission that
triggered them.
"""

from __future__ import annotations

import logging
import uuid

import httpx

from beefmusic.services.task_queue import task_queue
from beefmusic.utils.redaction import redact_secrets

logger = logging.getLogger("beefmusic.services.notifications")

ANONYMOUS_NICK = "Anónimo"


def format_song_request(nick: str, style: str, idea: str, request_id: uuid.UUID) -> str:
    return (
        "🎵 **Nueva petición de canción**\n"
        f"👤 Nick: {nick}\n"
        f"🎧 Estilo: {style}\n"
        f"📝 Idea:\n{idea}\n\n"
        f"🆔 ID petición: {request_id}"
    )


def format_suggestion(nick: str | None, message: str, suggestion_id: uuid.UUID) -> str:
    return (
        "💡 **Nueva sugerencia para BeefMusic**\n"
        f"👤 Nick: {nick or ANONYMOUS_NICK}\n"
        f"📝 Sugerencia:\n{message}\n\n"
        f"🆔 ID sugerencia: {suggestion_id}"
    )


def format_report(nick: str | None, message: str, report_id: uuid.UUID) -> str:
    return (
        "🐛 **Nuevo reporte de problema en BeefMusic**\n"
        f"👤 Nick: {nick or ANONYMOUS_NICK}\n"
        f"📝 Detalle del problema:\n{message}\n\n"
        f"🆔 ID reporte: {report_id}"
    )


async def notify(channel: str, content: str) -> bool:
    """Send or enqueue a notification; returns False when delivery failed."""
    try:
        await task_queue.enqueue_notification(channel=channel, content=content)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Discord %s notification failed: %s", channel, redact_secrets(str(exc)))
        return False
    return True
