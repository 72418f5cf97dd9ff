"""
FastAPI application entry point for GameHub Insight backend.

This module creates the FastAPI app instance, registers all routers and
installs the centralized error handlers that render every failure as::

    {"success": false, "message": "..."}

Outside production the body also carries an ``error`` object with the error
code and traceback.
"""

import logging
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gamehub.config import settings
from gamehub.routes.ai import router as ai_router
from gamehub.routes.auth import router as auth_router
from gamehub.routes.favorites import router as favorites_router
from gamehub.routes.games import router as games_router
from gamehub.routes.health import router as health_router
from gamehub.utils.errors import GameHubError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (none if unset)
    - Any other environment: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for the web client."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


def error_body(message: str, exc: Exception | None = None, code: str | None = None) -> Dict[str, Any]:
    """Build the error envelope; debug details only outside production."""
    body: Dict[str, Any] = {"success": False, "message": message}
    if exc is not None and not settings.is_production():
        body["error"] = {
            "code": code or type(exc).__name__,
            "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
        }
    return body


def _http_exception_message(detail: Any) -> str:
    if isinstance(detail, dict):
        return str(detail.get("details") or detail.get("error") or "Request failed")
    return str(detail)


# Create FastAPI app
app = FastAPI(
    title="GameHub Insight API",
    description="Game catalog, favorites and AI recommendations",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(GameHubError)
async def gamehub_error_handler(request: Request, exc: GameHubError):
    """Render domain errors with their own status code."""
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: status={exc.status_code} "
            f"code={exc.error_code} message={exc.message}"
        )
    else:
        logger.warning(
            f"{request.method} {request.url.path} rejected: status={exc.status_code} "
            f"message={exc.message}"
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc, exc.error_code),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTPException (auth failures, unknown routes) in the common envelope."""
    message = _http_exception_message(exc.detail)
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    This helps diagnose 422 errors from the frontend.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "message": "Validation error",
            "details": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort for errors no route converted into a GameHubError."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", exc),
    )


# Configure CORS with environment-based origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(games_router)
app.include_router(favorites_router)
app.include_router(ai_router)

logger.info("FastAPI app initialized successfully")
