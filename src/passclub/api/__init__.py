"""HTTP API routers."""

from fastapi import APIRouter

from .endpoints import leaderboard_router, register_router, system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    register_router,
    leaderboard_router,
    system_router,
)

__all__ = ["ALL_ROUTERS"]
