# ============================================================================
# REGISTRY SERVICE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Read-only registry views
# PURPOSE: Fetch persisted actions for display and dispatch
# CREATED: 13 OCT 2026
# ============================================================================
"""
Registry Service

Read-only views over the persisted action registry. Every call goes
straight to the repository; nothing is cached between calls.
"""

import logging
from typing import Dict, Optional, Union

from core.models import ActionInstance, ActionSummary, TokenMapEntry
from repositories.base import ActionRepository
from services.tokens import build_token_map

logger = logging.getLogger(__name__)


class RegistryService:
    """Accessors for action rows."""

    def __init__(self, repository: ActionRepository):
        self.repository = repository

    def get_instance(self, aid: Union[int, str]) -> Optional[ActionInstance]:
        """One row by id, or None."""
        return self.repository.select_by_id(aid)

    def get_all(self) -> Dict[Union[int, str], ActionSummary]:
        """Every row keyed by id, parameters stripped."""
        return {row.aid: row.summary() for row in self.repository.select_all()}

    def get_configurable(self) -> Dict[Union[int, str], ActionInstance]:
        """Rows that carry stored parameters, keyed by id."""
        return {row.aid: row for row in self.repository.select_where_parameters_non_empty()}

    def token_map(self) -> Dict[str, TokenMapEntry]:
        """Token map over every persisted action."""
        return build_token_map(self.get_all())


__all__ = ["RegistryService"]
