"""
LeaderboardRepository - the shared score list kept under a single store key.

Persisted form is a JSON array of {"userId", "username", "score"} objects,
in first-submission order. This class is the only place that encodes or
decodes it.
"""

import json
import logging
from typing import Any, Optional

from pydantic import TypeAdapter

from app.models.leaderboard import ScoreEntry
from app.stores.base import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_LEADERBOARD_KEY = "leaderboard"

_entries_adapter = TypeAdapter(list[ScoreEntry])


class LeaderboardRepository:
    def __init__(self, store: KeyValueStore, key: str = DEFAULT_LEADERBOARD_KEY):
        self.store = store
        self.key = key

    def _decode(self, raw: Any) -> list[ScoreEntry]:
        """Parse the stored value. Raises ValueError when it is not a valid score list."""
        if isinstance(raw, list):
            # Backends that keep native documents may hand the list back as-is
            data = raw
        elif isinstance(raw, str):
            try:
                data = json.loads(raw)

                # Legacy writers stringified the list before handing it to the KV client
                if isinstance(data, str):
                    data = json.loads(data)
            except RecursionError as e:
                raise ValueError("value is nested too deeply") from e
        else:
            raise ValueError(f"expected a JSON string, got {type(raw).__name__}")

        if not isinstance(data, list):
            raise ValueError(f"expected a list, got {type(data).__name__}")

        entries = _entries_adapter.validate_python(data)
        return self._collapse_duplicates(entries)

    def _encode(self, entries: list[ScoreEntry]) -> str:
        return _entries_adapter.dump_json(entries, by_alias=True).decode()

    def _collapse_duplicates(self, entries: list[ScoreEntry]) -> list[ScoreEntry]:
        """Keep one entry per user: the best score, at its first position."""
        by_user: dict[str, ScoreEntry] = {}
        for entry in entries:
            current = by_user.get(entry.user_id)
            if current is None or entry.score > current.score:
                by_user[entry.user_id] = entry

        if len(by_user) != len(entries):
            logger.warning(
                f"⚠️ Leaderboard '{self.key}' had {len(entries) - len(by_user)} duplicate entries, collapsed"
            )

        # dicts keep first insertion order even when the value is replaced
        return list(by_user.values())

    async def load(self) -> list[ScoreEntry]:
        """
        Read the whole leaderboard.

        Absent key means an empty leaderboard. A value that cannot be decoded
        is treated as corrupted: the key is deleted and the read returns [].
        """
        raw = await self.store.get(self.key)
        if raw is None:
            return []

        try:
            return self._decode(raw)
        except ValueError as e:
            logger.warning(f"⚠️ Leaderboard '{self.key}' is corrupted, resetting: {e}")
            await self.store.delete(self.key)
            return []

    async def upsert_best_score(self, entry: ScoreEntry) -> Optional[int]:
        """
        Merge `entry` into the leaderboard keeping each user's best score.

        New users are appended. Existing users get their score and username
        replaced only when the new score is strictly greater. The full list is
        written back in every case.

        Returns the user's previous score, or None if the entry was created.

        The load/merge/set sequence holds the store's per-process lock for this
        key, so concurrent submissions in one process cannot lose each other's
        updates. Writers in other processes are NOT serialized: the last set
        wins and can discard a concurrent update. Closing that gap needs an
        atomic operation in the store itself.
        """
        async with self.store.lock(self.key):
            entries = await self.load()

            previous_score = None
            for idx, existing in enumerate(entries):
                if existing.user_id == entry.user_id:
                    previous_score = existing.score
                    if entry.score > existing.score:
                        entries[idx] = existing.model_copy(
                            update={"score": entry.score, "username": entry.username}
                        )
                    break
            else:
                entries.append(entry)

            await self.store.set(self.key, self._encode(entries))

        return previous_score

    async def ranked(self) -> list[ScoreEntry]:
        """
        Every entry, highest score first.

        Equal scores keep stored order, i.e. whoever submitted first ranks first.
        """
        entries = await self.load()
        # sorted() is stable, so ties keep their stored order
        return sorted(entries, key=lambda e: e.score, reverse=True)

    async def top_n(self, n: int) -> list[ScoreEntry]:
        """Highest scores first, at most `n` entries."""
        if n < 0:
            raise ValueError("n must be >= 0")

        return (await self.ranked())[:n]
