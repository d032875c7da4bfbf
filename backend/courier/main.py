"""Courier API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CourierError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Settings (including the required JWT secret) and the Session Authority are
      built before the app serves anything; a missing secret aborts startup
    - Database initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import courier.infrastructure.database as database
from courier.api.dependencies import get_session_authority
from courier.api.error_handlers import register_error_handlers
from courier.api.routes import health, messages, users
from courier.config import get_settings
from courier.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    get_session_authority()
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Courier API started")
    yield
    if database.db_manager:
        await database.db_manager.close()
    logger.info("Courier API shutting down")


app = FastAPI(
    title="Courier API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(messages.router)

register_error_handlers(app)
