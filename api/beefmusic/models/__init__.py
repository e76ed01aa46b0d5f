from beefmusic.models.song import Song, SongStatus, SongVote, VoteKind
from beefmusic.models.submission import ProblemReport, RequestStatus, SongRequest, Suggestion
from beefmusic.models.user import User

__all__ = [
    "ProblemReport",
    "RequestStatus",
    "Song",
    "SongRequest",
    "SongStatus",
    "SongVote",
    "Suggestion",
    "User",
    "VoteKind",
]
