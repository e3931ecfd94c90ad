"""Pydantic schemas for the HTTP API."""

from .registration import LeaderboardEntry, RegisterRequest, RegisterResponse

__all__ = ["LeaderboardEntry", "RegisterRequest", "RegisterResponse"]
