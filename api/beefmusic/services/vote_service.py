"""Like/dislike toggle for a (user, song) pair.

Invariants:
- At most one vote row exists per (user, song); the unique constraint backs this.
- Each call issues exactly one create, update, or delete, chosen by TRANSITIONS.
- Returned counts are recounted after the write, inside the same transaction.
"""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from beefmusic.models.song import SongVote, VoteKind
from beefmusic.services import vote_count_service, vote_store
from beefmusic.services.vote_store import VoteConflictError, VoteStoreError

logger = logging.getLogger("beefmusic.services.votes")


class VoteValidationError(ValueError):
    """Raised for vote kinds other than like/dislike."""


class SongNotFoundError(LookupError):
    """Raised when the voted song does not exist."""


class VoteState(str, enum.Enum):
    NO_VOTE = "no_vote"
    LIKED = "liked"
    DISLIKED = "disliked"


class VoteEffect(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


TRANSITIONS: dict[tuple[VoteState, VoteKind], tuple[VoteState, VoteEffect]] = {
    (VoteState.NO_VOTE, VoteKind.LIKE): (VoteState.LIKED, VoteEffect.CREATE),
    (VoteState.NO_VOTE, VoteKind.DISLIKE): (VoteState.DISLIKED, VoteEffect.CREATE),
    (VoteState.LIKED, VoteKind.LIKE): (VoteState.NO_VOTE, VoteEffect.DELETE),
    (VoteState.LIKED, VoteKind.DISLIKE): (VoteState.DISLIKED, VoteEffect.UPDATE),
    (VoteState.DISLIKED, VoteKind.DISLIKE): (VoteState.NO_VOTE, VoteEffect.DELETE),
    (VoteState.DISLIKED, VoteKind.LIKE): (VoteState.LIKED, VoteEffect.UPDATE),
}

_STATE_FOR_KIND = {VoteKind.LIKE: VoteState.LIKED, VoteKind.DISLIKE: VoteState.DISLIKED}
_KIND_FOR_STATE = {state: kind for kind, state in _STATE_FOR_KIND.items()}


@dataclass(slots=True)
class VoteOutcome:
    likes: int
    dislikes: int
    user_vote: VoteKind | None


def parse_kind(value: str | VoteKind | None) -> VoteKind:
    """Coerce a raw vote kind, rejecting anything but like/dislike."""
    if isinstance(value, VoteKind):
        return value
    try:
        return VoteKind(value)
    except ValueError as exc:
        raise VoteValidationError("Tipo de voto no válido. Usa 'like' o 'dislike'.") from exc


def state_of(vote: SongVote | None) -> VoteState:
    if vote is None:
        return VoteState.NO_VOTE
    return _STATE_FOR_KIND[vote.kind]


def kind_of(state: VoteState) -> VoteKind | None:
    return _KIND_FOR_STATE.get(state)


def apply(current: VoteState, action: VoteKind) -> tuple[VoteState, VoteEffect]:
    """Return the next state and the store effect for a vote action."""
    return TRANSITIONS[(current, action)]


async def _toggle(session: AsyncSession, user_id: uuid.UUID, song_id: uuid.UUID, action: VoteKind) -> VoteState:
    existing = await vote_store.get_vote(session, user_id, song_id)
    new_state, effect = apply(state_of(existing), action)
    if effect is VoteEffect.DELETE:
        await vote_store.delete_vote(session, existing)
    else:
        await vote_store.put_vote(session, user_id, song_id, action, existing=existing)
    logger.debug("Vote %s by %s on %s -> %s", effect.value, user_id, song_id, new_state.value)
    return new_state


async def vote(
    session: AsyncSession, user_id: uuid.UUID, song_id: uuid.UUID, action: str | VoteKind | None
) -> VoteOutcome:
    """Apply a like/dislike toggle and return the song's fresh counts."""
    kind = parse_kind(action)
    if not await vote_store.song_exists(session, song_id):
        raise SongNotFoundError("Canción no encontrada")

    for attempt in range(2):
        try:
            new_state = await _toggle(session, user_id, song_id, kind)
            counts = await vote_count_service.counts_for(session, song_id)
            await vote_store.commit(session)
        except VoteConflictError as exc:
            await vote_store.rollback(session)
            if attempt:
                logger.error("Vote conflict persisted for user %s on song %s", user_id, song_id)
                raise VoteStoreError("Vote conflict persisted after retry") from exc
            logger.info("Vote conflict for user %s on song %s; re-reading state", user_id, song_id)
            continue
        except VoteStoreError:
            await vote_store.rollback(session)
            logger.exception("Vote aborted for user %s on song %s", user_id, song_id)
            raise
        return VoteOutcome(likes=counts.likes, dislikes=counts.dislikes, user_vote=kind_of(new_state))
    raise VoteStoreError("Vote could not be applied")  # pragma: no cover
