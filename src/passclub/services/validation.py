"""Password policy checks applied before anything touches the store."""

from __future__ import annotations

from typing import Final

MAX_DIGIT_RUN: Final[int] = 11
USERNAME_MAX_LENGTH: Final[int] = 50

_DIGITS: Final[frozenset[str]] = frozenset("0123456789")

__all__ = ["MAX_DIGIT_RUN", "USERNAME_MAX_LENGTH", "has_excessive_digit_run"]


def has_excessive_digit_run(password: str) -> bool:
    """Return True if the password contains ``MAX_DIGIT_RUN`` or more digits in a row.

    Only ASCII digits count. Any other character ends the current run, so
    separate runs are never added together.
    """
    run = 0
    for char in password:
        if char in _DIGITS:
            run += 1
            if run >= MAX_DIGIT_RUN:
                return True
        else:
            run = 0
    return False
