"""Entry point for the FastAPI application.

This module constructs the FastAPI app, includes the routers and sets up
startup and shutdown events. Billing configuration (price catalog and
webhook secrets) is validated at startup so a misconfigured deployment
fails before the first webhook arrives.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.api.deps import get_price_catalog
from app.api.error_handlers import (
    configuration_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)
from app.api.routes.stripe_webhooks import router as stripe_webhooks_router
from app.core.config import get_webhook_secret_list, settings
from app.core.database import init_db
from app.core.observability import init_sentry
from app.services.errors import ConfigurationError

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("Starting up...")
    if init_sentry("api"):
        logger.info("Sentry SDK initialized (api)")
    catalog = get_price_catalog()
    if not get_webhook_secret_list(settings):
        raise ConfigurationError("STRIPE_WEBHOOK_SECRET not configured")
    logger.info("Billing configured with %d recurring prices", len(catalog.periods))
    if (settings.ENVIRONMENT or "development").lower() == "development":
        await init_db()
    yield
    # Shutdown
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
)

# Register custom exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ConfigurationError, configuration_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include routers
app.include_router(stripe_webhooks_router)


@app.api_route("/health", methods=["GET", "HEAD"])
async def health_check():
    """Health check endpoint (supports GET & HEAD)."""
    return {"status": "healthy"}
