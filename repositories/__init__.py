# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Persistence adapters
# PURPOSE: Storage for action rows
# CREATED: 13 OCT 2026
# ============================================================================
"""
Repositories Module

Persistence adapters for the action registry.

Usage:
    from repositories import PostgresActionRepository, init_pool

    repo = PostgresActionRepository(init_pool())
    row = repo.select_by_id(42)
"""

from .base import (
    ActionId,
    ActionRepository,
    RepositoryError,
    ActionNotFoundError,
    DuplicateActionError,
)
from .memory_repo import InMemoryActionRepository
from .action_repo import PostgresActionRepository
from .database import init_pool, get_pool, close_pool, ensure_schema
from .factory import open_repository

__all__ = [
    "ActionId",
    "ActionRepository",
    "RepositoryError",
    "ActionNotFoundError",
    "DuplicateActionError",
    "InMemoryActionRepository",
    "PostgresActionRepository",
    "init_pool",
    "get_pool",
    "close_pool",
    "ensure_schema",
    "open_repository",
]
