"""Leaderboard endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from passclub.api.dependencies import LeaderboardCacheDep, PasswordRepositoryDep
from passclub.core.errors import StoreError
from passclub.core.settings import settings
from passclub.schemas.registration import LeaderboardEntry

LEADERBOARD_UNAVAILABLE_MESSAGE = "Couldn't fetch leaderboard right now 📊❌"

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
def get_leaderboard(
    cache: LeaderboardCacheDep,
    repository: PasswordRepositoryDep,
) -> list[LeaderboardEntry]:
    """Return the top users by number of distinct passwords."""
    limit = settings.leaderboard_size
    try:
        rows = cache.get(lambda: repository.top_usernames(limit))
    except Exception as exc:
        raise StoreError(LEADERBOARD_UNAVAILABLE_MESSAGE) from exc
    return list(rows)
