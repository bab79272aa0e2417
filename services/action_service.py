# ============================================================================
# ACTION SERVICE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Domain service - Configured instance lifecycle
# PURPOSE: Save, load and delete configured action instances
# CREATED: 14 OCT 2026
# ============================================================================
"""
ActionService

Lifecycle of configured action instances: rows with a numeric id whose
stored parameters are merged into the context on every invocation.

Rules:
- A new save allocates the next numeric id from the repository
- configurable is CONFIGURABLE_FORM when the callback has a settings
  form, ADVANCED otherwise
- When a form exists, parameters pass through it before being stored;
  whatever it returns is what gets saved
- Deleting a row broadcasts one deletion notification

Pattern: Constructor injection of repository, catalog and notifier.
"""

from typing import Any, Dict, Optional, Union

from core.contracts import ConfigurableKind
from core.logging import get_logger, log_audit
from core.models import ActionInstance
from handlers.registry import HandlerCatalog, HandlerNotFoundError
from repositories.base import ActionNotFoundError, ActionRepository
from services.notifications import DeletionNotifier

logger = get_logger(__name__)


class ActionService:
    """Business rules for configured action instances."""

    def __init__(
        self,
        repository: ActionRepository,
        catalog: HandlerCatalog,
        notifier: Optional[DeletionNotifier] = None,
    ):
        self.repository = repository
        self.catalog = catalog
        self.notifier = notifier if notifier is not None else DeletionNotifier()

    # ================================================================
    # SAVE
    # ================================================================

    def save(
        self,
        callback: str,
        type: str,
        parameters: Optional[Dict[str, Any]] = None,
        label: str = "",
        aid: Optional[Union[int, str]] = None,
    ) -> ActionInstance:
        """
        Create or update a configured instance.

        Args:
            callback: Handler-of-record name
            type: Subject type the action acts on
            parameters: Settings merged into the context at invocation
            label: Human-readable label
            aid: Existing id to update; omit to create a new instance

        Returns:
            The stored row

        Raises:
            HandlerNotFoundError: callback is not registered
            ValueError: the settings form rejected the parameters
            ActionNotFoundError: aid given but no such row
        """
        if not self.catalog.has_handler(callback):
            raise HandlerNotFoundError(callback)

        form = self.catalog.get_form(callback)
        parameters = dict(parameters or {})
        if form is not None:
            parameters = form(parameters)

        configurable = (
            ConfigurableKind.CONFIGURABLE_FORM if form is not None
            else ConfigurableKind.ADVANCED
        )

        if aid is not None:
            action = self.repository.merge_by_key(aid, {
                "callback": callback,
                "type": type,
                "parameters": parameters,
                "label": label or callback,
                "configurable": configurable,
            })
            logger.info(f"Updated action {aid} ({callback})")
            return action

        action = ActionInstance(
            aid=self.repository.next_id(),
            type=type,
            callback=callback,
            parameters=parameters,
            label=label or callback,
            configurable=configurable,
        )
        stored = self.repository.insert(action)
        logger.info(f"Created action {stored.aid} ({callback})")
        log_audit("info", "Action '{action}' created.", {"action": stored.label, "aid": stored.aid})
        return stored

    # ================================================================
    # LOAD / DELETE
    # ================================================================

    def load(self, aid: Union[int, str]) -> ActionInstance:
        """
        Raises:
            ActionNotFoundError: no such row
        """
        action = self.repository.select_by_id(aid)
        if action is None:
            raise ActionNotFoundError(aid, operation="load")
        return action

    def delete(self, aid: Union[int, str]) -> ActionInstance:
        """
        Delete a row and notify listeners.

        Returns:
            The row as it was before deletion

        Raises:
            ActionNotFoundError: no such row
        """
        action = self.load(aid)
        if not self.repository.delete(aid):
            raise ActionNotFoundError(aid, operation="delete")

        self.notifier.broadcast(aid)
        log_audit("info", "Action '{action}' deleted.", {"action": action.label or aid, "aid": aid})
        return action


__all__ = ["ActionService"]
