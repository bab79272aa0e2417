# ============================================================================
# REPOSITORY FACTORY
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Backend selection
# PURPOSE: Open the action registry for the configured storage backend
# CREATED: 15 OCT 2026
# ============================================================================
"""
Repository Factory

Picks the persistence adapter from ACTIONS_STORAGE (or an explicit
override). The PostgreSQL adapter gets its pool opened and its schema
ensured before it is handed out.
"""

import logging
from typing import Optional

from core.config import StorageBackend, get_defaults
from .base import ActionRepository
from .memory_repo import InMemoryActionRepository
from .action_repo import PostgresActionRepository
from .database import init_pool, ensure_schema

logger = logging.getLogger(__name__)


def open_repository(
    backend: Optional[str] = None,
    connection_string: Optional[str] = None,
) -> ActionRepository:
    """
    Open the action registry.

    Args:
        backend: "postgres" or "memory" (defaults to ACTIONS_STORAGE)
        connection_string: Override the PostgreSQL connection string

    Raises:
        ValueError if the backend is unknown
    """
    storage = get_defaults().storage
    backend = (backend or storage.backend).lower()

    if backend == StorageBackend.MEMORY.value:
        logger.info("Using in-memory action registry")
        return InMemoryActionRepository()

    if backend != StorageBackend.POSTGRES.value:
        raise ValueError(f"Unknown storage backend: {backend}")

    pool = init_pool(connection_string=connection_string)
    ensure_schema(pool, storage.db_schema)
    logger.info(f"Using PostgreSQL action registry (schema {storage.db_schema})")
    return PostgresActionRepository(pool, storage.db_schema)


__all__ = ["open_repository"]
