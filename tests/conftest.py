# tests/conftest.py
from __future__ import annotations

import os
import random
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

_RUNTIME_DIR = Path(tempfile.mkdtemp(prefix="passclub-tests-"))
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUDIT_LOG_PATH", str(_RUNTIME_DIR / "secure" / "password_log.json"))
os.environ.setdefault("STATIC_DIR", str(_RUNTIME_DIR / "public"))

from passclub.api.dependencies import get_audit_log, get_leaderboard_cache, get_rng  # noqa: E402
from passclub.db.session import Base  # noqa: E402
from passclub.db.session import get_db as app_get_session  # noqa: E402
from passclub.main import app as fastapi_app  # noqa: E402
from passclub.services.audit_log import AuditLog  # noqa: E402
from passclub.services.leaderboard import LeaderboardCache  # noqa: E402

TEST_DB_URL = "sqlite://"
CACHE_WINDOW_SECONDS = 60.0


class FakeClock:
    """Monotonic clock that only moves when a test advances it."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def audit_log(tmp_path: Path) -> AuditLog:
    """Return an initialized audit log inside the test's temp directory."""
    log = AuditLog(tmp_path / "secure" / "password_log.json")
    log.ensure_initialized()
    return log


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def leaderboard_cache(clock: FakeClock) -> LeaderboardCache:
    return LeaderboardCache(CACHE_WINDOW_SECONDS, clock=clock)


@pytest.fixture()
def client(
    app: FastAPI,
    audit_log: AuditLog,
    rng: random.Random,
    leaderboard_cache: LeaderboardCache,
) -> Iterator[TestClient]:
    overrides = {
        get_audit_log: lambda: audit_log,
        get_rng: lambda: rng,
        get_leaderboard_cache: lambda: leaderboard_cache,
    }
    app.dependency_overrides.update(overrides)
    try:
        with TestClient(app, base_url="http://test") as test_client:
            yield test_client
    finally:
        for dependency in overrides:
            app.dependency_overrides.pop(dependency, None)
