"""
VitalVibe - Main FastAPI Application
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import settings
from .api import (
    auth_router, chat_router, health_metrics_router, moods_router,
    notifications_router, nutrition_router, routines_router, status_router,
    symptoms_router, users_router, workouts_router,
)
from .core.logging_config import setup_logging
from .llm import provider_from_settings
from .middleware import RequestLoggingMiddleware, register_exception_handlers
from .storage import LocalStorage

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the store and LLM provider for the lifetime of the process."""
    # Startup
    setup_logging(settings)

    # A store that cannot connect aborts startup
    store = LocalStorage(settings.local_storage_path)
    await store.connect()
    app.state.store = store

    app.state.llm_provider = provider_from_settings(settings)
    if app.state.llm_provider is None:
        logger.warning("No LLM API key configured; AI annotations will use fallbacks")

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Storage path: {settings.local_storage_path}")
    logger.info(f"LLM provider: {settings.llm_provider} (timeout {settings.llm_timeout_seconds}s)")
    logger.info(f"Validation policy: {settings.validation_policy}")
    logger.info(f"Debug mode: {settings.debug}")
    yield
    # Shutdown
    await store.disconnect()
    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Personal health tracking with AI mood analysis and symptom triage",
    lifespan=lifespan
)

register_exception_handlers(app)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware (after CORS)
if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(status_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(moods_router)
app.include_router(symptoms_router)
app.include_router(chat_router)
app.include_router(workouts_router)
app.include_router(nutrition_router)
app.include_router(health_metrics_router)
app.include_router(routines_router)
app.include_router(notifications_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "message": "Welcome to VitalVibe - Your Personal Health Tracker"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "vitalvibe.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
