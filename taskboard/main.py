"""Task Board API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskBoardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store and session registry built on startup via lifespan, held on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: TaskBoardError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
    - allow_credentials on CORS: the session travels in a cookie
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.error_handlers import register_error_handlers
from taskboard.api.routes import auth, boards, health, tasks
from taskboard.config import get_settings
from taskboard.infrastructure.observability import setup_logging
from taskboard.infrastructure.sessions import InMemorySessionRegistry
from taskboard.infrastructure.store_factory import build_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.store = await build_store(settings)
    app.state.sessions = InMemorySessionRegistry(settings.session_ttl_seconds)
    logger.info("Task Board API started")
    yield
    await app.state.store.close()
    logger.info("Task Board API shutting down")


app = FastAPI(
    title="Task Board API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(boards.router)
app.include_router(tasks.router)

register_error_handlers(app)
