"""
Placement Tracker - FastAPI Application

Main entry point for the selection pipeline API.
Provides endpoints for drive registration, selection rounds, results and reports.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from placement import __version__
from placement.config.settings import settings
from placement.infrastructure.db.database import init_db, close_db
from placement.infrastructure.exceptions import (
    PlacementTrackerError,
    ConflictError,
    EligibilityRejectedError,
    InvalidArgumentError,
    NotFoundError,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    logger.info(f"Placement Tracker starting in {settings.environment} mode...")
    await init_db()
    logger.info("Database connection pool initialized")

    yield

    # Shutdown
    await close_db()
    logger.info("Database connection pool closed")
    logger.info("Placement Tracker shutting down...")


app = FastAPI(
    title="Placement Tracker",
    description="Selection pipeline and eligibility engine for campus placement drives",
    version=__version__,
    lifespan=lifespan,
    debug=settings.debug,
)

# CORS configuration from Settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    """Handle malformed arguments."""
    return JSONResponse(
        status_code=400,
        content=exc.to_dict(),
    )


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    """Handle not found errors."""
    return JSONResponse(
        status_code=404,
        content=exc.to_dict(),
    )


@app.exception_handler(ConflictError)
async def conflict_error_handler(request: Request, exc: ConflictError):
    """Handle duplicate registrations and rounds."""
    return JSONResponse(
        status_code=409,
        content=exc.to_dict(),
    )


@app.exception_handler(EligibilityRejectedError)
async def eligibility_rejected_handler(request: Request, exc: EligibilityRejectedError):
    """Handle failed eligibility, exposing every reason."""
    return JSONResponse(
        status_code=422,
        content=exc.to_dict(),
    )


@app.exception_handler(PlacementTrackerError)
async def general_error_handler(request: Request, exc: PlacementTrackerError):
    """Handle all other application errors."""
    logger.error(f"Unhandled application error: {exc.message}")
    return JSONResponse(
        status_code=500,
        content=exc.to_dict(),
    )


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "placement-tracker"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Placement Tracker API",
        "version": __version__,
        "docs": "/docs",
    }


# ============================================================================
# Import and register routers
# ============================================================================

from placement.api.routes import drives, reports, rounds, students  # noqa: E402

app.include_router(drives.router)
app.include_router(rounds.router)
app.include_router(reports.router)
app.include_router(students.router)
