from __future__ import annotations

import logging
from typing import Any

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from beefmusic.core.config import settings
from beefmusic.utils.redaction import redact_secrets

logger = logging.getLogger("beefmusic.jobs.notifications")

# Discord rejects message content above this length.
DISCORD_CONTENT_LIMIT = 2000


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential_jitter(initial=1, max=8),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)
def _post_webhook(url: str, content: str) -> int:
    with httpx.Client(timeout=10) as client:
        response = client.post(url, json={"content": content[:DISCORD_CONTENT_LIMIT]})
        response.raise_for_status()
        return response.status_code


def send_discord_notification_job(*, channel: str, content: str) -> dict[str, Any]:
    """RQ-friendly job that posts a message to the channel's Discord webhook."""
    url = settings.webhook_for(channel)
    if not url:
        logger.debug("No Discord webhook configured for %s; skipping", channel)
        return {"channel": channel, "sent": False}
    status_code = _post_webhook(url, content)
    logger.info("Sent %s notification to %s (%s)", channel, redact_secrets(url), status_code)
    return {"channel": channel, "sent": True, "status_code": status_code}
