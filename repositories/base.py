# ============================================================================
# BASE REPOSITORY - ACTION REGISTRY CONTRACT
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Infrastructure - Persistence adapter contract
# PURPOSE: Common error handling and the operations every adapter provides
# CREATED: 13 OCT 2026
# ============================================================================
"""
Base Repository Patterns

Abstract base class for action registry storage:
- The persistence adapter contract (select/insert/merge/delete)
- Consistent error handling with a context manager
- Standardized logging

Adapters decode stored parameters before returning rows; callers only
ever see ActionInstance objects with a plain dict of parameters.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Union

from core.models import ActionInstance

logger = logging.getLogger(__name__)

ActionId = Union[int, str]


class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, operation: str = None, entity_id: ActionId = None):
        self.operation = operation
        self.entity_id = entity_id
        super().__init__(message)


class ActionNotFoundError(RepositoryError):
    """Raised when an explicit operation targets an id with no row."""

    def __init__(self, aid: ActionId, operation: str = None):
        super().__init__(f"Action not found: {aid}", operation=operation, entity_id=aid)


class DuplicateActionError(RepositoryError):
    """Raised when inserting a row whose id already exists."""

    def __init__(self, aid: ActionId):
        super().__init__(f"Action already exists: {aid}", operation="insert", entity_id=aid)


class ActionRepository(ABC):
    """
    Persistence adapter for action rows.

    Single-row insert, merge and delete are expected to be atomic.
    Nothing is cached; every call reads current state.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.debug(f"{self.__class__.__name__} initialized")

    # =========================================================================
    # CONTRACT
    # =========================================================================

    @abstractmethod
    def select_all(self) -> List[ActionInstance]:
        """All rows."""

    @abstractmethod
    def select_by_id(self, aid: ActionId) -> Optional[ActionInstance]:
        """One row, or None."""

    @abstractmethod
    def select_by_ids(self, aids: Iterable[ActionId]) -> List[ActionInstance]:
        """Rows for the given ids; missing ids are simply absent."""

    @abstractmethod
    def select_where_parameters_non_empty(self) -> List[ActionInstance]:
        """Rows carrying stored parameters (configured instances)."""

    @abstractmethod
    def insert(self, action: ActionInstance) -> ActionInstance:
        """
        Insert a new row.

        Raises:
            DuplicateActionError if the id exists
        """

    @abstractmethod
    def merge_by_key(self, aid: ActionId, fields: Dict[str, Any]) -> ActionInstance:
        """
        Update the given fields of an existing row.

        Raises:
            ActionNotFoundError if the id has no row
        """

    @abstractmethod
    def delete(self, aid: ActionId) -> bool:
        """Delete a row. Returns False if there was nothing to delete."""

    @abstractmethod
    def next_id(self) -> int:
        """Allocate the next numeric id for a configured instance."""

    # =========================================================================
    # SHARED HELPERS
    # =========================================================================

    MERGEABLE_FIELDS = frozenset({
        "type", "callback", "parameters", "label", "configurable",
        "node_type", "node_id", "trigger_names", "source_file",
    })

    def _check_fields(self, fields: Dict[str, Any]) -> None:
        unknown = set(fields) - self.MERGEABLE_FIELDS
        if unknown:
            raise RepositoryError(
                f"Cannot merge unknown fields: {sorted(unknown)}",
                operation="merge",
            )

    @contextmanager
    def _error_context(self, operation: str, entity_id: Optional[ActionId] = None):
        """
        Context manager for consistent error handling.

        Repository errors pass through untouched; anything else is logged
        with context and re-raised as RepositoryError.

        Example:
            with self._error_context("action insert", action.aid):
                self._execute_insert(action)
        """
        try:
            yield
        except RepositoryError:
            raise
        except Exception as e:
            error_msg = f"{operation} failed"
            if entity_id is not None:
                error_msg += f" for {entity_id}"
            error_msg += f": {e}"
            self.logger.error(error_msg)
            raise RepositoryError(error_msg, operation=operation, entity_id=entity_id) from e

    def _log_operation(
        self,
        success: bool,
        operation: str,
        entity_id: ActionId,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log operation result with consistent formatting.

        Format:
            Success: "operation: entity_id | details"
            Failure: "operation failed: entity_id | details"
        """
        entity_id = str(entity_id)
        short_id = entity_id[:32] + "..." if len(entity_id) > 32 else entity_id

        if success:
            msg = f"{operation}: {short_id}"
        else:
            msg = f"{operation} failed: {short_id}"

        if details:
            msg += f" | {details}"

        if success:
            self.logger.info(msg)
        else:
            self.logger.warning(msg)


__all__ = [
    "ActionId",
    "RepositoryError",
    "ActionNotFoundError",
    "DuplicateActionError",
    "ActionRepository",
]
