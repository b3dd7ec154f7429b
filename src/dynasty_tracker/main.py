"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dynasty_tracker import __version__
from dynasty_tracker.api import api_router
from dynasty_tracker.config import get_settings
from dynasty_tracker.database import create_tables
from dynasty_tracker.services.errors import DynastyError, InvalidInputError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - runs on startup and shutdown."""
    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Database: %s", settings.database_url.split("///")[-1])  # Hide path details
    logger.info("Max coaches per dynasty: %s", settings.max_coaches_per_dynasty)

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables created")

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


@app.exception_handler(InvalidInputError)
async def invalid_input_error_handler(_request: Request, exc: InvalidInputError) -> JSONResponse:
    """Handle InvalidInputError exceptions globally, with per-field detail."""
    return JSONResponse(
        status_code=422,
        content={
            "detail": str(exc) or "Invalid input",
            "kind": exc.kind,
            "errors": [asdict(error) for error in exc.errors],
        },
    )


@app.exception_handler(DynastyError)
async def dynasty_error_handler(_request: Request, exc: DynastyError) -> JSONResponse:
    """Handle NotFound, Forbidden and LimitExceeded errors globally."""
    return JSONResponse(
        status_code=exc.status_code or 500,
        content={"detail": str(exc), "kind": exc.kind},
    )


# Include API router
app.include_router(api_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the API is running."""
    return {"status": "healthy", "version": __version__}
