"""Weeklist API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WeeklistError → {message, data, error} envelope
    - CORS configured from settings (not hardcoded)
    - Database initialized and expiry sweeper started on startup via lifespan;
      sweeper cancelled and engine disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Sweeper is a process-lifetime asyncio task: no global scheduler state
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import auth, health, weeklists
from app.config import get_settings
from app.infrastructure.database import init_db
from app.infrastructure.observability import setup_logging
from app.services.expiry_sweeper import start_expiry_sweeper, stop_expiry_sweeper

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_all()

    sweeper = None
    if settings.sweep_enabled:
        sweeper = start_expiry_sweeper(manager, settings.sweep_hour_utc)
    logger.info("Weeklist API started")
    yield
    logger.info("Weeklist API shutting down")
    if sweeper is not None:
        await stop_expiry_sweeper(sweeper)
    await manager.dispose()


app = FastAPI(title="Weeklist API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(weeklists.router)

register_error_handlers(app)
