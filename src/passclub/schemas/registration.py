"""Request and response schemas for registration and the leaderboard."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Credentials submitted to ``POST /register``.

    Both fields are optional at the schema level so that missing values get
    the same friendly prompt as blank ones.
    """

    username: str | None = Field(None, description="Display name, compared case-insensitively")
    password: str | None = Field(None, description="Candidate password in plaintext")


class RegisterResponse(BaseModel):
    """Outcome of a registration attempt."""

    success: bool = Field(..., description="True if a new password was recorded")
    message: str = Field(..., description="Human-readable outcome")


class LeaderboardEntry(BaseModel):
    """A username and how many distinct passwords it has registered."""

    username: str
    count: int = Field(..., ge=1)

    model_config = ConfigDict(from_attributes=True, frozen=True)
