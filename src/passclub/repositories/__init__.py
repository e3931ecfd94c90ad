"""Repositories wrapping record store access."""

from .password_repo import PasswordRepository

__all__ = ["PasswordRepository"]
