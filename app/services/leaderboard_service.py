"""
LeaderboardService - Business logic for score submissions and top lists.

Handles validation and delegates the merge to LeaderboardRepository.
"""

import logging
import math
from typing import Any, Optional

from app.core.config import get_settings
from app.models.leaderboard import ScoreEntry, SubmitResult
from app.models.user import Identity
from app.repositories.leaderboard_repository import LeaderboardRepository
from app.stores.base import KeyValueStore

logger = logging.getLogger(__name__)


class LeaderboardServiceError(Exception):
    """Base exception for leaderboard service errors."""
    pass


class InvalidScoreError(LeaderboardServiceError):
    """Raised when a submission is malformed."""
    pass


def validate_entry(user_id: Any, username: Any, score: Any) -> ScoreEntry:
    """
    Check a submission and build its ScoreEntry.

    Validates:
    - user id and username are non-empty strings
    - score is a finite, non-negative integer (bools are rejected)
    """
    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidScoreError("userId must be a non-empty string")

    if not isinstance(username, str) or not username.strip():
        raise InvalidScoreError("username must be a non-empty string")

    if isinstance(score, bool):
        raise InvalidScoreError("score must be an integer")

    if isinstance(score, float):
        if not math.isfinite(score) or not score.is_integer():
            raise InvalidScoreError("score must be a finite integer")
        score = int(score)

    if not isinstance(score, int):
        raise InvalidScoreError("score must be an integer")

    if score < 0:
        raise InvalidScoreError("score must be >= 0")

    return ScoreEntry(user_id=user_id, username=username.strip(), score=score)


class LeaderboardService:
    def __init__(self, store: KeyValueStore):
        self.settings = get_settings()
        self.repo = LeaderboardRepository(store, key=self.settings.leaderboard_key)

    def _resolve_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.settings.leaderboard_default_limit
        if limit < 0:
            raise InvalidScoreError("limit must be >= 0")
        return min(limit, self.settings.leaderboard_max_limit)

    async def get_top(self, limit: Optional[int] = None) -> list[ScoreEntry]:
        """Top scores, highest first. Default and cap come from settings."""
        return await self.repo.top_n(self._resolve_limit(limit))

    async def submit_score(self, identity: Identity, score: Any) -> SubmitResult:
        """
        Record `score` for the authenticated user.

        The entry is always built from the session identity. Submitting a
        score that is not higher than the stored one is a successful no-op,
        so retries are safe.

        Raises: InvalidScoreError, StoreUnavailableError
        """
        entry = validate_entry(identity.id, identity.username, score)

        previous_score = await self.repo.upsert_best_score(entry)

        improved = previous_score is None or entry.score > previous_score
        best_score = entry.score if improved else previous_score

        if improved:
            logger.info(f"🏆 New best for {entry.username} ({entry.user_id}): {previous_score} -> {entry.score}")

        return SubmitResult(
            previous_score=previous_score,
            best_score=best_score,
            improved=improved,
        )

    async def get_user_rank(self, user_id: str) -> Optional[dict]:
        """
        Get user's 1-based position across the whole leaderboard.

        Returns dict with rank and entry, or None if the user has no score.
        """
        leaderboard = await self.repo.ranked()

        for idx, entry in enumerate(leaderboard):
            if entry.user_id == user_id:
                return {
                    "rank": idx + 1,
                    "entry": entry
                }

        return None
