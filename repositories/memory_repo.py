# ============================================================================
# IN-MEMORY ACTION REPOSITORY
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Infrastructure - Process-local action storage
# PURPOSE: Action registry without a database (tests, embedded hosts)
# CREATED: 13 OCT 2026
# ============================================================================
"""
In-Memory Action Repository

Keeps rows in a dict guarded by a lock. Rows are copied on the way in
and out so callers cannot mutate stored state through returned objects.
"""

import threading
from typing import Any, Dict, Iterable, List, Optional

from core.models import ActionInstance
from .base import (
    ActionId,
    ActionNotFoundError,
    ActionRepository,
    DuplicateActionError,
)


class InMemoryActionRepository(ActionRepository):
    """Dict-backed ActionRepository."""

    def __init__(self, rows: Optional[Iterable[ActionInstance]] = None):
        super().__init__()
        self._rows: Dict[ActionId, ActionInstance] = {}
        self._lock = threading.Lock()
        self._last_id = 0
        for row in rows or []:
            self.insert(row)

    def select_all(self) -> List[ActionInstance]:
        with self._lock:
            return [row.model_copy(deep=True) for row in self._rows.values()]

    def select_by_id(self, aid: ActionId) -> Optional[ActionInstance]:
        with self._lock:
            row = self._rows.get(aid)
            return row.model_copy(deep=True) if row else None

    def select_by_ids(self, aids: Iterable[ActionId]) -> List[ActionInstance]:
        with self._lock:
            return [
                self._rows[aid].model_copy(deep=True)
                for aid in dict.fromkeys(aids)
                if aid in self._rows
            ]

    def select_where_parameters_non_empty(self) -> List[ActionInstance]:
        with self._lock:
            return [row.model_copy(deep=True) for row in self._rows.values() if row.parameters]

    def insert(self, action: ActionInstance) -> ActionInstance:
        with self._lock:
            if action.aid in self._rows:
                raise DuplicateActionError(action.aid)
            self._rows[action.aid] = action.model_copy(deep=True)
            if isinstance(action.aid, int):
                self._last_id = max(self._last_id, action.aid)
        self._log_operation(True, "Inserted action", action.aid)
        return action

    def merge_by_key(self, aid: ActionId, fields: Dict[str, Any]) -> ActionInstance:
        self._check_fields(fields)
        with self._lock:
            row = self._rows.get(aid)
            if row is None:
                raise ActionNotFoundError(aid, operation="merge")
            merged = ActionInstance.model_validate({**row.model_dump(), **fields})
            self._rows[aid] = merged
        self._log_operation(True, "Updated action", aid, {"fields": sorted(fields)})
        return merged.model_copy(deep=True)

    def delete(self, aid: ActionId) -> bool:
        with self._lock:
            removed = self._rows.pop(aid, None) is not None
        if removed:
            self._log_operation(True, "Deleted action", aid)
        return removed

    def next_id(self) -> int:
        with self._lock:
            self._last_id += 1
            return self._last_id

    def __len__(self) -> int:
        return len(self._rows)


__all__ = ["InMemoryActionRepository"]
