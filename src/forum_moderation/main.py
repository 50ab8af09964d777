# src/forum_moderation/main.py
"""Main entry point for the forum moderation application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from forum_moderation.api.v1 import forums_router, topics_router, users_router
from forum_moderation.api.v1 import messages
from forum_moderation.core.errors import (
    CreationForbiddenError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)
from forum_moderation.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Forum Moderation API",
    description="Trust-gated content moderation for discussion forums",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include API routers
app.include_router(forums_router, prefix="/api/v1")
app.include_router(topics_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


def _alert(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"alert": message})


@app.exception_handler(CreationForbiddenError)
async def creation_forbidden_handler(_request: Request, exc: CreationForbiddenError) -> JSONResponse:
    return _alert(status.HTTP_403_FORBIDDEN, messages.SPAM_FLAGGED.format(kind=exc.kind))


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(_request: Request, exc: UnauthorizedError) -> JSONResponse:
    return _alert(status.HTTP_403_FORBIDDEN, str(exc) or messages.ACCESS_DENIED)


@app.exception_handler(NotFoundError)
async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return _alert(status.HTTP_404_NOT_FOUND, messages.NOT_FOUND.format(kind=exc.kind))


@app.exception_handler(InvalidStateError)
async def invalid_state_handler(request: Request, exc: InvalidStateError) -> JSONResponse:
    logger.error("Invalid state while handling %s %s", request.method, request.url.path, exc_info=exc)
    return _alert(status.HTTP_500_INTERNAL_SERVER_ERROR, messages.INTERNAL_ERROR)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("forum_moderation.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
