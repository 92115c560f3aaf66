from .user import Identity, UserResponse, SessionResponse
from .leaderboard import ScoreEntry, ScoreSubmission, SubmitResult, SubmitResponse

__all__ = [
    "Identity",
    "UserResponse",
    "SessionResponse",
    "ScoreEntry",
    "ScoreSubmission",
    "SubmitResult",
    "SubmitResponse",
]
