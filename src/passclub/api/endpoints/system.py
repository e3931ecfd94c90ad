"""Liveness endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from passclub.api.dependencies import SessionDep

router = APIRouter(tags=["system"])


@router.get("/health")
def health_check(db: SessionDep, response: Response) -> dict[str, str]:
    """Report whether the service can reach its record store."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "unhealthy"}
    return {"status": "ok"}
