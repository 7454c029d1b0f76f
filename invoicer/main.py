"""Invoicer API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map InvoicerError → structured JSON responses
    - Session gate runs inside SessionMiddleware, so it always sees a decoded session
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Middleware order matters: Starlette wraps later additions around earlier ones,
      so the gate is registered first and SessionMiddleware after it
    - Signed-cookie sessions (SessionMiddleware): no server-side session store
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from invoicer.api.error_handlers import register_error_handlers
from invoicer.api.session_gate import register_session_gate
from invoicer.api.routes import auth, dashboard, health, invoices
from invoicer.config import get_settings
import invoicer.infrastructure.database as database
from invoicer.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Invoicer API started")
    yield
    await manager.dispose()
    logger.info("Invoicer API shutting down")


app = FastAPI(
    title="Invoicer API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()

# Gate first, then the session cookie layer around it
register_session_gate(app, settings)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    max_age=settings.session_max_age_seconds,
    same_site="lax",
    https_only=settings.session_https_only,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes, registered explicitly
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(invoices.router)

register_error_handlers(app)
