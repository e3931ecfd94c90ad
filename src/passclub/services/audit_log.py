"""Append-only JSON audit trail of accepted registrations.

The trail lives in a single file holding a JSON array. Each write reads the
whole array, appends one entry and atomically replaces the file. Writes are serialized
with a lock owned by the ``AuditLog`` instance, since request handlers run on
a thread pool.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any

from passclub.core.errors import AuditLogError
from passclub.db.time import isoformat_z, utcnow

logger = logging.getLogger(__name__)

__all__ = ["AuditLog"]


class AuditLog:
    """File-backed audit trail with best-effort recording."""

    def __init__(self, path: Path | str, *, clock: Callable[[], datetime] = utcnow) -> None:
        self.path = Path(path)
        self._clock = clock
        self._lock = Lock()

    def ensure_initialized(self) -> None:
        """Create the parent directory and an empty array file if absent.

        Failures are logged; the service keeps running without an audit trail.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self._write([])
        except OSError:
            logger.exception("Error setting up audit log at %s", self.path)

    def read_entries(self) -> list[dict[str, Any]]:
        """Return every entry currently in the file."""
        try:
            raw = self.path.read_text(encoding="utf-8")
            entries = json.loads(raw)
        except (OSError, ValueError) as exc:
            raise AuditLogError(f"cannot read audit log {self.path}: {exc}") from exc
        if not isinstance(entries, list):
            raise AuditLogError(f"audit log {self.path} does not hold a JSON array")
        return entries

    def append(self, username: str, password: str, password_hash: str) -> dict[str, Any]:
        """Append one entry and return it.

        Raises:
            AuditLogError: if the file cannot be read, parsed or written.
        """
        entry = {
            "timestamp": isoformat_z(self._clock()),
            "username": username,
            "password": password,
            "hash": password_hash,
        }
        with self._lock:
            entries = self.read_entries()
            entries.append(entry)
            try:
                self._write(entries)
            except (OSError, ValueError) as exc:
                raise AuditLogError(f"cannot write audit log {self.path}: {exc}") from exc
        return entry

    def record(self, username: str, password: str, password_hash: str) -> bool:
        """Append an entry, logging and swallowing any failure.

        Returns:
            True if the entry was written.
        """
        try:
            self.append(username, password, password_hash)
        except AuditLogError:
            logger.exception("Error logging password entry for %r", username)
            return False
        return True

    def _write(self, entries: list[dict[str, Any]]) -> None:
        # ASCII escapes keep lone surrogates encodable; the temp file plus
        # os.replace leaves the previous array intact if the write fails.
        payload = json.dumps(entries, indent=2)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise
