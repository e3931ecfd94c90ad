"""Registration pipeline: validate, hash, deduplicate, record, respond."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from typing import Final, Protocol, TypeVar

from fastapi import status

from passclub.core.errors import (
    MISSING_FIELDS_MESSAGE,
    SERVER_HICCUP_MESSAGE,
    StoreError,
    ValidationFailure,
)
from passclub.models.password_record import PasswordRecord
from passclub.services.audit_log import AuditLog
from passclub.services.validation import USERNAME_MAX_LENGTH, has_excessive_digit_run
from passclub.utils.hash import password_hexdigest

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

WELCOME_MESSAGE: Final[str] = "Welcome to the club! 🎉"
SUCCESS_MESSAGES: Final[tuple[str, ...]] = (
    "Smart thinking! Another unique password! 🧠",
    "You're on a roll! Keep them coming! 🎲",
    "Brilliant choice! Added to your collection! ✨",
    "Another masterpiece! You're crushing it! 💫",
    "Level up! Your password game is strong! 🎮",
)
ALREADY_TRIED_MESSAGE: Final[str] = "You've already tried that password 😪"
TAKEN_MESSAGE_TEMPLATE: Final[str] = 'This password is already taken by "{owner}" 😭'
TOO_MANY_DIGITS_MESSAGE: Final[str] = "Whoa there! That's too many numbers in a row 🔢"
USERNAME_TOO_LONG_MESSAGE: Final[str] = "Username too long! Keep it under 50 characters 📏"

__all__ = [
    "ALREADY_TRIED_MESSAGE",
    "RegistrationOutcome",
    "RegistrationService",
    "SUCCESS_MESSAGES",
    "TAKEN_MESSAGE_TEMPLATE",
    "TOO_MANY_DIGITS_MESSAGE",
    "USERNAME_TOO_LONG_MESSAGE",
    "WELCOME_MESSAGE",
]


class RandomSource(Protocol):
    """The subset of ``random.Random`` used to pick a celebratory message."""

    def choice(self, seq: Sequence[_T]) -> _T: ...


class RecordStore(Protocol):
    """Record store operations the pipeline depends on."""

    def user_exists(self, normalized_username: str) -> bool: ...

    def find_by_hash(self, password_hash: str) -> PasswordRecord | None: ...

    def add(self, username: str, password_hash: str) -> PasswordRecord: ...


@dataclass(frozen=True)
class RegistrationOutcome:
    """Result of one registration attempt, ready to be sent to the client."""

    success: bool
    message: str
    status_code: int = status.HTTP_200_OK


@dataclass(frozen=True)
class _Candidate:
    username: str
    normalized_username: str
    password: str


class RegistrationService:
    """Run a registration attempt against the record store and audit log.

    Args:
        store: Record store access, normally a ``PasswordRepository``.
        audit_log: Best-effort audit trail written after each insert.
        rng: Random source used to pick the returning-user message.
        lock: Optional lock held from the duplicate check through the insert.
            Without it two concurrent requests with the same password can
            both pass the check and both be recorded.
    """

    def __init__(
        self,
        store: RecordStore,
        audit_log: AuditLog,
        rng: RandomSource,
        *,
        lock: AbstractContextManager[object] | None = None,
    ) -> None:
        self.store = store
        self.audit_log = audit_log
        self.rng = rng
        self._lock: AbstractContextManager[object] = lock if lock is not None else nullcontext()

    def register(self, username: str | None, password: str | None) -> RegistrationOutcome:
        """Validate and record a password, describing the outcome for the client."""
        try:
            candidate = self._validate(username, password)
        except ValidationFailure as exc:
            return RegistrationOutcome(False, exc.message, exc.status_code)

        try:
            with self._lock:
                return self._record(candidate)
        except StoreError:
            logger.exception("Registration error for %r", candidate.username)
            return RegistrationOutcome(
                False, SERVER_HICCUP_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def _validate(self, username: str | None, password: str | None) -> _Candidate:
        if not username or not username.strip() or not password or not password.strip():
            raise ValidationFailure(MISSING_FIELDS_MESSAGE)

        if has_excessive_digit_run(password):
            raise ValidationFailure(TOO_MANY_DIGITS_MESSAGE)

        trimmed = username.strip()
        if len(trimmed) > USERNAME_MAX_LENGTH:
            raise ValidationFailure(USERNAME_TOO_LONG_MESSAGE)

        return _Candidate(username=trimmed, normalized_username=trimmed.lower(), password=password)

    def _record(self, candidate: _Candidate) -> RegistrationOutcome:
        password_hash = password_hexdigest(candidate.password)

        returning_user = self.store.user_exists(candidate.normalized_username)
        existing = self.store.find_by_hash(password_hash)
        if existing is not None:
            if existing.username.lower() == candidate.normalized_username:
                return RegistrationOutcome(False, ALREADY_TRIED_MESSAGE)
            return RegistrationOutcome(
                False, TAKEN_MESSAGE_TEMPLATE.format(owner=existing.username)
            )

        self.store.add(candidate.username, password_hash)
        self.audit_log.record(candidate.username, candidate.password, password_hash)

        if returning_user:
            return RegistrationOutcome(True, self.rng.choice(SUCCESS_MESSAGES))
        return RegistrationOutcome(True, WELCOME_MESSAGE)
