"""Service layer for registration, auditing and the leaderboard."""

from .audit_log import AuditLog
from .leaderboard import LeaderboardCache
from .registration import RegistrationOutcome, RegistrationService
from .validation import has_excessive_digit_run

__all__ = [
    "AuditLog",
    "LeaderboardCache",
    "RegistrationOutcome",
    "RegistrationService",
    "has_excessive_digit_run",
]
