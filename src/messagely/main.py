# src/messagely/main.py
"""Main entry point for the Messagely application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from messagely.api import auth_router, messages_router, users_router
from messagely.core.errors import MessagelyError
from messagely.core.logging import setup_logging
from messagely.core.settings import settings

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Send short text messages between registered users",
    version=settings.app_version,
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


@app.exception_handler(MessagelyError)
async def messagely_error_handler(request: Request, exc: MessagelyError) -> JSONResponse:
    """Render domain errors as ``{"detail": ...}`` with their HTTP status."""
    logger.debug("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


# Include API routers
app.include_router(auth_router)
app.include_router(messages_router)
app.include_router(users_router)


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

    uvicorn.run("messagely.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
