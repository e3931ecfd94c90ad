"""SQLAlchemy model for registered passwords."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from passclub.db.session import Base
from passclub.db.time import utcnow


class PasswordRecord(Base):
    """One accepted password, identified only by its digest.

    ``password_hash`` is expected to be unique across the table, but that is
    upheld by the registration pipeline rather than by a constraint.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_password_hash", "password_hash"),
        Index("idx_username", "username"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
