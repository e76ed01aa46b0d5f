"""Simple redaction helpers for logs and diagnostics."""

from __future__ import annotations

import re

_URL_USERINFO_RE = re.compile(r"([a-z][a-z0-9+.-]*://)([^@/]+)@", re.IGNORECASE)
_QUERY_SECRET_RE = re.compile(r"(?i)(token|secret|password|api_key|apikey)=([^&\s]+)")
# Discord webhook URLs carry their secret as the last path segment.
_WEBHOOK_TOKEN_RE = re.compile(r"(?i)(/api/webhooks/\d+/)([A-Za-z0-9._-]+)")


def redact_secrets(text: str) -> str:
    """Redact common secret patterns from a log string."""
    if not text:
        return text
    redacted = _URL_USERINFO_RE.sub(r"\1***@", text)
    redacted = _QUERY_SECRET_RE.sub(r"\1=***", redacted)
    redacted = _WEBHOOK_TOKEN_RE.sub(r"\1***", redacted)
    return redacted
