"""API endpoint modules."""

from .leaderboard import router as leaderboard_router
from .register import router as register_router
from .system import router as system_router

__all__ = [
    "leaderboard_router",
    "register_router",
    "system_router",
]
