"""
Main FastAPI Application

Entry point for the multi-tenant notes service.
Configures middleware, routes, error handlers, and startup/shutdown events.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from notesapp import __version__
from notesapp.api.endpoints import auth, notes, seed, tenants
from notesapp.config import get_settings
from notesapp.core.exceptions import InvalidInputError, NotesAppError
from notesapp.database import engine, init_db
from notesapp.middleware.request_context import RequestContextMiddleware
from notesapp.utils.logging import get_logger, setup_logging

settings = get_settings()

setup_logging(
    log_level=settings.LOG_LEVEL,
    json_format=(settings.ENVIRONMENT == "production")
)
logger = get_logger(__name__)


def _request_context(request: Request) -> dict:
    principal = getattr(request.state, "principal", None)
    return {
        "path": request.url.path,
        "method": request.method,
        "tenant_id": principal.tenant_id if principal else None,
        "user_id": principal.user_id if principal else None,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")

    # Schema management outside development is done by migrations
    if settings.ENVIRONMENT == "development":
        init_db()

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")
    engine.dispose()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Multi-Tenant Notes",
    description="Tenant-isolated notes API with RBAC and subscription quotas",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# ============================================================================
# MIDDLEWARE CONFIGURATION
# ============================================================================

# Bearer tokens travel in a header, not cookies, so credentials stay off
# and a wildcard origin is allowed.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin", "X-Request-ID"],
    max_age=86400,
)

app.add_middleware(RequestContextMiddleware)


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================

@app.exception_handler(NotesAppError)
async def notes_app_error_handler(request: Request, exc: NotesAppError):
    """Render service errors as {"detail", "type", ...extra}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "type": exc.error_type, **exc.extra()},
        headers=exc.headers or {}
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed input is a 400, not FastAPI's default 422."""
    fields = [".".join(str(part) for part in error["loc"][1:]) for error in exc.errors()]
    error = InvalidInputError()
    if fields:
        error = InvalidInputError(
            f"Invalid or missing fields: {', '.join(f for f in fields if f) or 'body'}"
        )
    return await notes_app_error_handler(request, error)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """
    Storage faults surface as a generic 500.

    No retry is attempted here; clients decide whether to retry.
    """
    logger.error(
        f"Storage error: {type(exc).__name__}: {exc}",
        exc_info=True,
        extra=_request_context(request)
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "type": "storage_unavailable"}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler.

    SECURITY: Don't expose internal errors in production.
    Log full details but return generic error to client.
    """
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=True,
        extra=_request_context(request)
    )

    if settings.DEBUG:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "type": type(exc).__name__}
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "type": "internal_error"}
    )


# ============================================================================
# ROUTES
# ============================================================================

@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint for load balancers."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": __version__
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Multi-Tenant Notes API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


app.include_router(auth.router, prefix="/api")
app.include_router(notes.router, prefix="/api")
app.include_router(tenants.router, prefix="/api")

if settings.seed_enabled:
    app.include_router(seed.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug: {settings.DEBUG}")

    uvicorn.run(
        "notesapp.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
