"""Origin allow-list enforcement for browser callers."""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings

logger = logging.getLogger(__name__)


def is_origin_allowed(origin: str | None, allowed_origins: Iterable[str]) -> bool:
    """Return True when ``origin`` may call the API.

    The comparison is exact, matching ``CORSMiddleware``; the allow-list is
    normalised once by :class:`core.config.Settings`. Requests without an
    ``Origin`` header are not cross-origin browser calls and are let through.
    """

    if not origin:
        return True
    allowed = set(allowed_origins)
    return "*" in allowed or origin in allowed


def register_origin_guard(app: FastAPI, allowed_origins: Iterable[str]) -> None:
    """Reject requests whose ``Origin`` is not on the allow-list with a 403."""

    if getattr(app.state, "_origin_guard_installed", False):  # pragma: no cover - idempotence
        return

    origins = tuple(allowed_origins)

    @app.middleware("http")
    async def _guard_origin(request: Request, call_next):  # type: ignore[override]
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, origins):
            logger.warning(
                "Rejected %s %s from disallowed origin %s", request.method, request.url.path, origin
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": f"Origin not allowed: {origin}"},
            )
        return await call_next(request)

    app.state._origin_guard_installed = True


def configure_cross_origin(app: FastAPI, settings: Settings) -> None:
    """Install the origin guard and the CORS middleware in the right order.

    Middleware added later wraps earlier middleware, so CORS answers
    preflight requests before the guard sees them.
    """

    register_origin_guard(app, settings.allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_methods=list(settings.allowed_methods),
        allow_headers=["Content-Type"],
        expose_headers=["Content-Disposition"],
    )


__all__ = ["configure_cross_origin", "is_origin_allowed", "register_origin_guard"]
