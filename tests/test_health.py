# tests/test_health.py
"""Tests for the application shell: lifecycle, headers and liveness."""

from __future__ import annotations

import json
import threading

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from passclub.core.settings import settings
from passclub.services.audit_log import AuditLog
from passclub.services.leaderboard import LeaderboardCache
from passclub.services.registration import RegistrationService

EXPECTED_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET, POST",
}


def test_health_responds(client) -> None:
    r = client.get("/health")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "ok"}


@pytest.mark.parametrize(
    ("method", "path", "body"),
    [
        ("GET", "/leaderboard", None),
        ("POST", "/register", {"username": "alice", "password": "goodpass"}),
        ("POST", "/register", {"username": "", "password": ""}),
        ("GET", "/does-not-exist", None),
    ],
)
def test_security_and_cors_headers_on_every_response(client, method, path, body) -> None:
    r = client.request(method, path, json=body)
    for name, value in EXPECTED_HEADERS.items():
        assert r.headers[name] == value


def test_lifespan_wires_state_and_audit_file(app) -> None:
    with TestClient(app) as test_client:
        state = test_client.app.state
        assert isinstance(state.audit_log, AuditLog)
        assert isinstance(state.leaderboard_cache, LeaderboardCache)
        assert state.leaderboard_cache.window_seconds == settings.leaderboard_cache_seconds
        assert state.registration_lock is None
        assert hasattr(state.rng, "choice")

    assert settings.audit_log_path.exists()
    assert isinstance(json.loads(settings.audit_log_path.read_text(encoding="utf-8")), list)


def test_serialized_registrations_hold_a_real_lock(app, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "serialize_registrations", True)
    held: list[bool] = []
    original_record = RegistrationService._record

    def spy(self, candidate):
        held.append(self._lock is lock and lock.locked())
        return original_record(self, candidate)

    monkeypatch.setattr(RegistrationService, "_record", spy)

    with TestClient(app) as test_client:
        lock = test_client.app.state.registration_lock
        assert isinstance(lock, type(threading.Lock()))

        r = test_client.post("/register", json={"username": "alice", "password": "goodpass"})

    assert r.json()["success"] is True
    assert held == [True]
    assert not lock.locked()
