"""SQLAlchemy models for the passclub service."""

from .password_record import PasswordRecord

__all__ = ["PasswordRecord"]
