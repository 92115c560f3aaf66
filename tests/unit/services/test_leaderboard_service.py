"""
Unit tests for LeaderboardService
"""

import math

import pytest

from app.models.user import Identity
from app.services.leaderboard_service import (
    LeaderboardService,
    InvalidScoreError,
    validate_entry
)


class TestValidateEntry:
    """Validation policy applied before any write."""

    def test_valid_entry(self):
        entry = validate_entry("u1", "  alice ", 10)

        assert entry.user_id == "u1"
        assert entry.username == "alice"
        assert entry.score == 10

    def test_integral_float_is_accepted(self):
        assert validate_entry("u1", "alice", 12.0).score == 12

    @pytest.mark.parametrize("user_id, username, score", [
        ("", "alice", 10),
        ("   ", "alice", 10),
        (None, "alice", 10),
        ("u1", "", 10),
        ("u1", None, 10),
        ("u1", "alice", -1),
        ("u1", "alice", 1.5),
        ("u1", "alice", math.inf),
        ("u1", "alice", math.nan),
        ("u1", "alice", "10"),
        ("u1", "alice", True),
        ("u1", "alice", None),
    ])
    def test_invalid_entries_rejected(self, user_id, username, score):
        with pytest.raises(InvalidScoreError):
            validate_entry(user_id, username, score)


class TestLeaderboardService:
    """Test suite for LeaderboardService business logic."""

    @pytest.mark.asyncio
    async def test_first_submission_creates_entry(self, memory_store, sample_identity):
        service = LeaderboardService(memory_store)

        result = await service.submit_score(sample_identity, 42)

        assert result.improved is True
        assert result.previous_score is None
        assert result.best_score == 42

        top = await service.get_top()
        assert top[0].user_id == sample_identity.id
        assert top[0].username == sample_identity.username

    @pytest.mark.asyncio
    async def test_lower_submission_is_successful_noop(self, memory_store, sample_identity):
        service = LeaderboardService(memory_store)
        await service.submit_score(sample_identity, 42)

        result = await service.submit_score(sample_identity, 7)

        assert result.improved is False
        assert result.previous_score == 42
        assert result.best_score == 42

    @pytest.mark.asyncio
    async def test_retry_of_applied_submission_does_not_double_count(self, memory_store, sample_identity):
        service = LeaderboardService(memory_store)
        await service.submit_score(sample_identity, 42)

        result = await service.submit_score(sample_identity, 42)

        assert result.improved is False
        assert (await service.get_top())[0].score == 42

    @pytest.mark.asyncio
    async def test_invalid_score_leaves_leaderboard_untouched(self, memory_store, sample_identity):
        service = LeaderboardService(memory_store)

        with pytest.raises(InvalidScoreError):
            await service.submit_score(sample_identity, -5)

        assert await memory_store.get("leaderboard") is None

    @pytest.mark.asyncio
    async def test_get_top_default_limit(self, memory_store):
        service = LeaderboardService(memory_store)
        for i in range(15):
            await service.submit_score(Identity(id=f"u{i}", username=f"user{i}"), i)

        top = await service.get_top()

        assert len(top) == 10
        assert top[0].score == 14
        assert [e.score for e in top] == sorted((e.score for e in top), reverse=True)

    @pytest.mark.asyncio
    async def test_get_top_is_capped(self, memory_store):
        service = LeaderboardService(memory_store)
        for i in range(120):
            await service.submit_score(Identity(id=f"u{i}", username=f"user{i}"), i)

        assert len(await service.get_top(1000)) == 100
        assert len(await service.get_top(0)) == 0

    @pytest.mark.asyncio
    async def test_get_top_negative_limit(self, memory_store):
        service = LeaderboardService(memory_store)

        with pytest.raises(InvalidScoreError):
            await service.get_top(-1)

    @pytest.mark.asyncio
    async def test_get_user_rank(self, memory_store, sample_identity, other_identity):
        service = LeaderboardService(memory_store)
        await service.submit_score(sample_identity, 10)
        await service.submit_score(other_identity, 20)

        result = await service.get_user_rank(sample_identity.id)

        assert result["rank"] == 2
        assert result["entry"].score == 10
        assert await service.get_user_rank("nobody") is None
