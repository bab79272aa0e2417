# ============================================================================
# ACTION DISPATCH - MAIN APPLICATION
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - FastAPI application entry point
# PURPOSE: Admin API over the action registry and dispatcher
# CREATED: 15 OCT 2026
# ============================================================================
"""
Action Dispatch Main Application

FastAPI application that:
1. Opens the configured action registry (PostgreSQL or in-memory)
2. Imports handler modules so the catalog is populated
3. Optionally synchronizes the registry with the catalog on startup
4. Serves the admin HTTP API under /api/v1

Environment:
    ACTIONS_STORAGE        postgres (default) | memory
    ACTIONS_CONFIG_FILE    YAML settings file (optional)
    ACTIONS_SYNC_ON_STARTUP  true to synchronize at startup
    ACTIONS_DELETE_ORPHANS   true to remove orphans during that sync

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE, EPOCH, CODENAME

from core.config import ConfigStore, get_defaults
from repositories import open_repository, close_pool
from handlers import get_catalog
from services import (
    ActionDispatcher,
    ActionService,
    ActionSynchronizer,
    DeletionNotifier,
    RegistryService,
    TokenService,
)
from api.routes import router, set_services

# Configure logging using our structured logging system
from core.logging import configure_logging, get_logger

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Initializes services on startup, cleans up on shutdown.
    """
    logger.info(f"Starting Action Dispatch v{__version__} (Epoch {EPOCH}, Build {BUILD_DATE})")

    config = ConfigStore.from_env()
    repository = open_repository()
    catalog = get_catalog()
    notifier = DeletionNotifier()
    logger.info(f"Handler catalog loaded ({len(catalog)} actions)")

    dispatcher = ActionDispatcher(repository, catalog, config)
    synchronizer = ActionSynchronizer(repository, catalog, config, notifier)

    set_services(
        dispatcher=dispatcher,
        synchronizer=synchronizer,
        registry_service=RegistryService(repository),
        token_service=TokenService(catalog, repository),
        action_service=ActionService(repository, catalog, notifier),
    )

    if os.environ.get("ACTIONS_SYNC_ON_STARTUP", "").lower() == "true":
        report = synchronizer.synchronize(
            delete_orphans=get_defaults().sync.delete_orphans_on_startup,
        )
        logger.info(
            f"Startup sync: {len(report.inserted)} added, {report.orphan_count} orphaned, "
            f"{len(report.deleted)} removed"
        )

    yield

    # Shutdown
    logger.info("Shutting down Action Dispatch...")
    close_pool()
    logger.info("Action Dispatch stopped")


# Create FastAPI app
app = FastAPI(
    title="Action Dispatch",
    description=f"Epoch {EPOCH} ({CODENAME}) action registry and dispatcher",
    version=__version__,
    lifespan=lifespan,
)

# Include API routes
app.include_router(router, prefix="/api/v1")


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "Action Dispatch",
        "version": __version__,
        "epoch": EPOCH,
        "build_date": BUILD_DATE,
        "status": "running",
        "docs": "/docs",
    }


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
