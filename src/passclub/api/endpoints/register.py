"""Registration endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Response

from passclub.api.dependencies import RegistrationServiceDep
from passclub.schemas.registration import RegisterRequest, RegisterResponse

router = APIRouter(tags=["registration"])


@router.post("/register", response_model=RegisterResponse)
def register(
    payload: RegisterRequest,
    response: Response,
    service: RegistrationServiceDep,
) -> RegisterResponse:
    """Record a new password for a user.

    Duplicates are reported with ``success=false`` and a 200 status;
    validation failures use 400 and store failures 500.
    """
    outcome = service.register(payload.username, payload.password)
    response.status_code = outcome.status_code
    return RegisterResponse(success=outcome.success, message=outcome.message)
