"""ContactFlow Backend - Main FastAPI Application

Contact form backend with email ownership verification.

This module creates and configures the main FastAPI application, including:
- Contact and verification routers
- Middleware (request ID correlation, CORS)
- Exception handlers mapping contact errors to JSON bodies
- Health and observability endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import get_settings
from contact.router import router as contact_router
from database import create_tables
from domain.contact.errors import ContactError, ValidationError as ContactValidationError
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router

APP_NAME = "ContactFlow API"
APP_VERSION = "0.1.0"

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Startup: create missing tables when AUTO_CREATE_TABLES is set
    - Shutdown: log only; sessions are per request
    """
    logger.info(f"{APP_NAME} starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    if settings.AUTO_CREATE_TABLES:
        create_tables()
        logger.info("Database tables ensured")

    yield

    logger.info(f"{APP_NAME} shutting down...")


app = FastAPI(
    title=APP_NAME,
    description="Contact form submissions with email verification",
    version=APP_VERSION,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_url=None if settings.is_production else "/openapi.json",
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE CONFIGURATION
# =============================================================================

app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def _error_body(error: str, message: str, **extra: Any) -> dict:
    body = {"success": False, "error": error, "message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


@app.exception_handler(ContactError)
async def contact_exception_handler(request: Request, exc: ContactError) -> JSONResponse:
    """Map contact flow errors to their status code and a JSON body."""
    missing = exc.missing_fields if isinstance(exc, ContactValidationError) else None

    if exc.status_code >= 500:
        logger.error(
            f"Contact error on {request.method} {request.url.path}: {exc.message}",
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.warning(f"Contact request rejected on {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error_code, exc.message, missing_fields=missing or None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Malformed or oversized bodies are client errors, reported as 400."""
    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={"errors": [
            {"loc": err.get("loc"), "type": err.get("type"), "msg": err.get("msg")}
            for err in exc.errors()
        ]},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("validation_error", "Request validation failed"),
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle database errors that escaped the record store.

    Logs the full error but returns a generic message to prevent
    information leakage.
    """
    logger.error(
        f"Database error on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("database_error", "A database error occurred. Please try again later."),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Catch-all so no request error takes the process down."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred. Please try again later."),
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

# Observability (health, ready, metrics)
app.include_router(observability_router)

# Contact form and verification
app.include_router(contact_router)


@app.get("/", include_in_schema=False)
def root() -> dict[str, Any]:
    """Root endpoint - API information."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "status": "running",
        "docs": None if settings.is_production else "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
