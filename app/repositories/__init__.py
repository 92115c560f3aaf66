from .leaderboard_repository import LeaderboardRepository

__all__ = [
    "LeaderboardRepository",
]
