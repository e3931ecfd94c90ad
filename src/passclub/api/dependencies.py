"""FastAPI dependencies resolving per-process components from ``app.state``."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from passclub.db.session import get_db
from passclub.repositories.password_repo import PasswordRepository
from passclub.services.audit_log import AuditLog
from passclub.services.leaderboard import LeaderboardCache
from passclub.services.registration import RandomSource, RegistrationService


def get_audit_log(request: Request) -> AuditLog:
    """Return the audit log created at startup."""
    return request.app.state.audit_log


def get_leaderboard_cache(request: Request) -> LeaderboardCache:
    """Return the leaderboard cache created at startup."""
    return request.app.state.leaderboard_cache


def get_rng(request: Request) -> RandomSource:
    """Return the random source used for message selection."""
    return request.app.state.rng


def get_registration_lock(request: Request) -> AbstractContextManager[object] | None:
    """Return the registration lock, or None when registrations run unserialized."""
    return getattr(request.app.state, "registration_lock", None)


SessionDep = Annotated[Session, Depends(get_db)]
AuditLogDep = Annotated[AuditLog, Depends(get_audit_log)]
LeaderboardCacheDep = Annotated[LeaderboardCache, Depends(get_leaderboard_cache)]
RandomSourceDep = Annotated[RandomSource, Depends(get_rng)]
RegistrationLockDep = Annotated[
    AbstractContextManager[object] | None, Depends(get_registration_lock)
]


def get_password_repository(db: SessionDep) -> PasswordRepository:
    """Return a repository bound to the request's session."""
    return PasswordRepository(db)


PasswordRepositoryDep = Annotated[PasswordRepository, Depends(get_password_repository)]


def get_registration_service(
    repository: PasswordRepositoryDep,
    audit_log: AuditLogDep,
    rng: RandomSourceDep,
    lock: RegistrationLockDep,
) -> RegistrationService:
    """Assemble the registration pipeline for one request."""
    return RegistrationService(repository, audit_log, rng, lock=lock)


RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
