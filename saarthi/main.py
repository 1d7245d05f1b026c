"""
FastAPI Application Entry Point

This module initializes the FastAPI application with:
- CORS configuration
- Middleware setup
- Route registration
- Health check endpoints
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from saarthi.core.config import settings
from saarthi.db.database import check_db_connection, create_tables
from saarthi.storage import close_storage
from saarthi.middleware.logging import LoggingMiddleware
from saarthi.api.v1.router import api_router
from saarthi.api.errors import error_response

APP_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# ============================================================
# Application Lifespan Events
# ============================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
    - Check database connection (and create tables on SQLite)
    - Report whether the Gemini key is defined

    Shutdown:
    - Close the storage backend
    """
    # ========== STARTUP ==========
    logger.info(f"Starting {settings.PROJECT_NAME}...")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"GEMINI_API_KEY defined: {'yes' if settings.GEMINI_API_KEY else 'no'}")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    if settings.secret_key_is_ephemeral:
        logger.warning(
            "SECRET_KEY is not set; using a random key. Tokens will not survive "
            "a restart and are not shared between workers."
        )

    try:
        if settings.DATABASE_URL.startswith("sqlite"):
            # No migrations for local SQLite files
            await create_tables()
        db_healthy = await check_db_connection()
        if db_healthy:
            logger.info("Database connection established successfully")
        else:
            logger.warning("Database connection check failed")
    except SQLAlchemyError as e:
        logger.error(f"Database connection error on startup: {e}")

    yield  # Application runs here

    # ========== SHUTDOWN ==========
    logger.info(f"Shutting down {settings.PROJECT_NAME}...")
    await close_storage()
    logger.info("Shutdown complete")


# ============================================================
# Create FastAPI Application
# ============================================================
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    AI-Powered Study Companion API

    Features:
    - User Authentication (JWT)
    - Syllabus, essay, study plan and flashcard generation
    - Code explanation and tutor chat
    - Solving problems from photos
    - Quiz generation, grading and history
    """,
    version=APP_VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ----------------------------------------------------
# Middleware Configuration
# ----------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

if settings.DEBUG:
    app.add_middleware(LoggingMiddleware)


# ----------------------------------------------------
# Health Check Endpoints
# ----------------------------------------------------
@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs" if settings.DEBUG else "disabled"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for monitoring.

    Checks:
    - Database connectivity
    - Whether a Gemini key is configured (the key itself is never shown)
    """
    db_healthy = await check_db_connection()
    gemini_configured = bool(settings.GEMINI_API_KEY)

    overall = "healthy"
    if not db_healthy or not gemini_configured:
        overall = "degraded"

    return {
        "status": overall,
        "database": "connected" if db_healthy else "disconnected",
        "gemini_api_key_defined": gemini_configured,
        "storage_backend": settings.STORAGE_BACKEND,
        "version": APP_VERSION,
    }

# ============================================================
# Include API Router
# ============================================================
app.include_router(
    api_router,
    prefix=settings.API_V1_PREFIX
)


# ----------------------------------------------------
# Exception Handlers
# ----------------------------------------------------
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request, exc: RequestValidationError):
    """Missing or malformed input: 400 with the first problem found."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"] if part != "body")
    message = f"{field}: {first['msg']}" if field else first["msg"]
    logger.info(f"Rejected input on {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(404)
async def not_found_handler(request, exc):
    """Handle 404 errors."""
    return error_response(
        status.HTTP_404_NOT_FOUND,
        getattr(exc, "detail", None) or "Not found"
    )


@app.exception_handler(500)
async def internal_error_handler(request, exc):
    """Handle 500 errors."""
    logger.error(f"Internal server error: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
