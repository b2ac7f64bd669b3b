"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(CORS, request logging), exception handlers and monitoring, and includes all
API routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from promptframe_ai.core.database import async_session_maker, init_db
from promptframe_ai.core.database.repositories import AuthSessionRepository
from promptframe_ai.core.database.seed import seed_defaults
from promptframe_ai.core.logging_config import get_logger, setup_logging
from promptframe_ai.core.monitoring import initialize_logfire

from .api.v1 import (
    admin,
    ai_tools,
    auth,
    concept_lists,
    generation,
    health,
    media_adapters,
    preferences,
    project_sessions,
    styles,
    system_prompts,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging(log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    On startup the database is initialized, default data is seeded when
    ``PROMPTFRAME_AI_SEED_DEFAULTS`` is true and expired login sessions are
    removed. A failure is logged and the server keeps starting.
    """
    # Startup
    try:
        logger.info("Starting up PromptFrame-AI Server...")
        await init_db()
        async with async_session_maker() as session:
            if settings.seed_defaults:
                created = await seed_defaults(session)
                logger.info(f"Default data seeded: {created}")
            purged = await AuthSessionRepository(session).purge_expired()
            if purged:
                logger.info(f"Removed {purged} expired login session(s)")
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down PromptFrame-AI Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    PromptFrame-AI Server API

    Backend of the PromptFrame-AI image studio: image styles, AI style extraction and
    refinement, background image generation and editing jobs, project sessions and
    conversational concept lists.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_PREFIX}/openapi.json",
    docs_url=f"{constant.API_PREFIX}/docs",
    redoc_url=f"{constant.API_PREFIX}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=constant.API_PREFIX)
app.include_router(admin.router, prefix=constant.API_PREFIX)
app.include_router(styles.router, prefix=constant.API_PREFIX)
app.include_router(generation.router, prefix=constant.API_PREFIX)
app.include_router(project_sessions.router, prefix=constant.API_PREFIX)
app.include_router(ai_tools.router, prefix=constant.API_PREFIX)
app.include_router(preferences.router, prefix=constant.API_PREFIX)
app.include_router(system_prompts.router, prefix=constant.API_PREFIX)
app.include_router(media_adapters.router, prefix=constant.API_PREFIX)
app.include_router(concept_lists.router, prefix=constant.API_PREFIX)
