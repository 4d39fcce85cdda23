"""
Admissions API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database tables and the default admin account
- CORS middleware and request logging
- Error rendering
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from admissions_api import __version__
from admissions_api.api import api_router
from admissions_api.core.config import settings
from admissions_api.core.database import async_session_maker, close_db, init_db
from admissions_api.core.exceptions import register_exception_handlers
from admissions_api.core.logging_config import log_requests, setup_logging
from admissions_api.modules.auth.service import ensure_default_admin

logger = logging.getLogger(__name__)


def _check_secrets() -> None:
    """Refuse to start in production with fallback credentials."""
    if not settings.uses_default_secrets:
        return
    if settings.is_production:
        raise RuntimeError(
            "JWT_SECRET_KEY and ADMIN_PASSWORD must be set before running in production"
        )
    logger.warning(
        "SECURITY: default JWT secret or admin password in use. "
        "Override JWT_SECRET_KEY and ADMIN_PASSWORD before deploying."
    )


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Creates tables and seeds the default admin on startup; disposes the
    engine on shutdown.
    """
    setup_logging()
    logger.info(f"Starting Admissions API in {settings.python_env} mode...")
    _check_secrets()

    await init_db()
    async with async_session_maker() as session:
        await ensure_default_admin(session)
    logger.info("Database ready")

    yield  # Application runs here

    logger.info("Shutting down Admissions API...")
    await close_db()


app = FastAPI(
    title="Admissions API",
    description="School admissions intake and admin back-office API",
    version=__version__,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api")

register_exception_handlers(app)

app.middleware("http")(log_requests)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Admissions API is running. Endpoints are under /api/.",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Liveness check."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check():
    """Readiness check: the database must answer a trivial query."""
    try:
        async with async_session_maker() as session:
            await session.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "unavailable"})


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("admissions_api.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
