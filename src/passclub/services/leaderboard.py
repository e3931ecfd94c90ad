"""Time-windowed cache over the leaderboard aggregate query."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from passclub.schemas.registration import LeaderboardEntry

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS: float = 60.0

__all__ = ["DEFAULT_WINDOW_SECONDS", "LeaderboardCache", "LeaderboardSnapshot"]


@dataclass(frozen=True)
class LeaderboardSnapshot:
    """Rows produced by one aggregate query and when they were computed."""

    rows: tuple[LeaderboardEntry, ...]
    computed_at: float


class LeaderboardCache:
    """Holds at most one leaderboard snapshot and refreshes it once stale.

    There is no locking: concurrent misses may each run the query, and the
    last one to finish replaces the snapshot.
    """

    def __init__(
        self,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window_seconds = window_seconds
        self._clock = clock
        self._snapshot: LeaderboardSnapshot | None = None

    @property
    def snapshot(self) -> LeaderboardSnapshot | None:
        """Return the current snapshot, fresh or not."""
        return self._snapshot

    def is_fresh(self) -> bool:
        """Return True if a snapshot exists and is inside the window."""
        snapshot = self._snapshot
        return snapshot is not None and self._clock() - snapshot.computed_at < self.window_seconds

    def get(self, fetch: Callable[[], Iterable[LeaderboardEntry]]) -> tuple[LeaderboardEntry, ...]:
        """Return cached rows, calling ``fetch`` only when the snapshot is stale.

        Exceptions from ``fetch`` propagate and the previous snapshot is kept.
        """
        snapshot = self._snapshot
        if snapshot is not None and self._clock() - snapshot.computed_at < self.window_seconds:
            return snapshot.rows

        rows = tuple(fetch())
        self._snapshot = LeaderboardSnapshot(rows=rows, computed_at=self._clock())
        logger.debug("Leaderboard refreshed with %d rows", len(rows))
        return rows

    def invalidate(self) -> None:
        """Drop the snapshot so the next ``get`` queries again."""
        self._snapshot = None
