"""Main entry point for the passclub application."""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from passclub.api import ALL_ROUTERS
from passclub.core.errors import SERVER_HICCUP_MESSAGE, failure_body, register_exception_handlers
from passclub.core.logging_setup import configure_logging
from passclub.core.settings import settings
from passclub.db.session import create_tables, engine, ping
from passclub.services.audit_log import AuditLog
from passclub.services.leaderboard import LeaderboardCache

logger = logging.getLogger(__name__)

# Fixed response header policy, applied to every response.
SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}
CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET, POST",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.log_level)

    try:
        create_tables()
        ping()
    except SQLAlchemyError:
        logger.critical("Fatal database error; refusing to start", exc_info=True)
        raise
    logger.info("Connected to database %s", engine.url.render_as_string(hide_password=True))

    audit_log = AuditLog(settings.audit_log_path)
    audit_log.ensure_initialized()

    app.state.audit_log = audit_log
    app.state.leaderboard_cache = LeaderboardCache(settings.leaderboard_cache_seconds)
    app.state.rng = random.Random()
    app.state.registration_lock = threading.Lock() if settings.serialize_registrations else None

    yield

    logger.info("Received shutdown signal. Closing database connections...")
    engine.dispose()


async def apply_response_headers(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Attach the security and CORS headers, turning stray errors into a 500."""
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = JSONResponse(
            failure_body(SERVER_HICCUP_MESSAGE),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    response.headers.update(SECURITY_HEADERS)
    response.headers.update(CORS_HEADERS)
    return response


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

    app.middleware("http")(apply_response_headers)
    register_exception_handlers(app)

    for router in ALL_ROUTERS:
        app.include_router(router)

    # Mounted last so the API routes take precedence over files at "/".
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "passclub.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
