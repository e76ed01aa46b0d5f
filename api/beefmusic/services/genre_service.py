"""Genre label normalization.

Invariants:
- Keys differ only when the trimmed, lowercased, accent-stripped text differs.
- The function is pure; empty input maps to the unknown genre.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

UNKNOWN_KEY = "unknown"
UNKNOWN_LABEL = "Unknown"

CANONICAL_LABELS: dict[str, str] = {
    "dembow": "Dembow",
    "drill": "Drill",
    "trap": "Trap",
    "rap": "Rap",
    "reggaeton": "Reggaetón",
    "pop": "Pop",
    "boom bap": "Boom Bap",
    "reggaeton_dembow": "Reggaetón / Dembow",
}


@dataclass(frozen=True, slots=True)
class CanonicalGenre:
    key: str
    label: str


def fold_genre_key(raw: str) -> str:
    """Trim, lowercase, and strip diacritics (reggaetón -> reggaeton)."""
    lowered = raw.strip().lower()
    decomposed = unicodedata.normalize("NFD", lowered)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def normalize(raw: str | None) -> CanonicalGenre:
    """Collapse spelling variants of a genre into a stable key and display label."""
    if not raw or not raw.strip():
        return CanonicalGenre(UNKNOWN_KEY, UNKNOWN_LABEL)
    key = fold_genre_key(raw)
    label = CANONICAL_LABELS.get(key) or key[:1].upper() + key[1:]
    return CanonicalGenre(key, label)
