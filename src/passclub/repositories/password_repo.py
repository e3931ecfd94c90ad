"""Data access helpers for password records."""
from __future__ import annotations

import logging

from sqlalchemy import desc, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from passclub.core.errors import StoreError
from passclub.models.password_record import PasswordRecord
from passclub.schemas.registration import LeaderboardEntry

__all__ = ["PasswordRepository"]

logger = logging.getLogger(__name__)


class PasswordRepository:
    """Thin wrapper around database access for password records.

    Every SQLAlchemy failure is rolled back and re-raised as ``StoreError``.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _fail(self, action: str, exc: SQLAlchemyError) -> StoreError:
        # Callers log the returned error; only a failed rollback is logged here.
        try:
            self.session.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback after failing to %s also failed", action, exc_info=True)
        return StoreError(f"record store failed to {action}: {exc}")

    def user_exists(self, normalized_username: str) -> bool:
        """Return True if any record belongs to the lower-cased username."""
        try:
            row = (
                self.session.query(PasswordRecord.id)
                .filter(func.lower(PasswordRecord.username) == normalized_username)
                .first()
            )
        except SQLAlchemyError as exc:
            raise self._fail("look up username", exc) from exc
        return row is not None

    def find_by_hash(self, password_hash: str) -> PasswordRecord | None:
        """Return the earliest record carrying the digest, if any."""
        try:
            return (
                self.session.query(PasswordRecord)
                .filter(PasswordRecord.password_hash == password_hash)
                .order_by(PasswordRecord.id.asc())
                .first()
            )
        except SQLAlchemyError as exc:
            raise self._fail("look up password hash", exc) from exc

    def add(self, username: str, password_hash: str) -> PasswordRecord:
        """Insert and commit a new record, returning the persisted row."""
        record = PasswordRecord(username=username, password_hash=password_hash)
        try:
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        except SQLAlchemyError as exc:
            raise self._fail("insert record", exc) from exc
        return record

    def top_usernames(self, limit: int) -> list[LeaderboardEntry]:
        """Return usernames ranked by how many records they own.

        Ties are broken alphabetically so equal counts render in a stable order.
        """
        count = func.count(PasswordRecord.id).label("count")
        try:
            rows = (
                self.session.query(PasswordRecord.username, count)
                .group_by(PasswordRecord.username)
                .order_by(desc(count), PasswordRecord.username.asc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._fail("aggregate leaderboard", exc) from exc
        return [LeaderboardEntry(username=username, count=int(total)) for username, total in rows]
