# ============================================================================
# ACTION DISPATCHER
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Action invocation
# PURPOSE: Resolve identifiers to handlers, guard recursion, collect results
# CREATED: 14 OCT 2026
# ============================================================================
"""
Action Dispatcher

invoke() runs one action or a batch of actions against a subject and
returns a result per identifier.

Resolution:
- SimpleRef (str): catalog entry -> handler-of-record, no database read
- ConfigurableRef (int): stored row -> row.callback, row.parameters
  merged into a fresh copy of the context

Failure model:
- Unknown identity, missing row, unregistered callback, or a handler
  that raises: FAILURE for that identifier, the batch carries on
- A single identifier that is not a str, int or ActionRef: TypeError,
  so an empty result for a single identifier means the guard tripped
- Nesting deeper than max_stack on one thread: audited, nothing runs,
  empty result

Each action sees its own copy of the caller's context plus its own
stored parameters. Parameters of one action never show up in another's
context, and handler mutations of the context do not leak back.

Usage:
    dispatcher = ActionDispatcher(repository, get_catalog())
    results = dispatcher.invoke(
        ["publish_subject", 42], subject, {"hook": "subject_update"},
    )
    # {"publish_subject": True, 42: False}
"""

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from core.config import ConfigStore, DispatchDefaults, get_defaults
from core.contracts import FAILURE, ActionKey, ActionRef, ConfigurableRef, SimpleRef, to_action_ref
from core.logging import AuditSink, log_audit, log_context
from core.models import ActionInstance
from handlers.registry import HandlerCatalog
from repositories.base import ActionRepository, RepositoryError

logger = logging.getLogger(__name__)


# ============================================================================
# CALL DEPTH
# ============================================================================

# Per-thread nesting depth of invoke(); concurrent requests on other
# threads never see each other's depth.
_call_state = threading.local()


def current_depth() -> int:
    """Nesting depth of invoke() on the calling thread."""
    return getattr(_call_state, "depth", 0)


def _is_batch(identifiers: Any) -> bool:
    return isinstance(identifiers, (list, tuple, set, frozenset))


def _is_identifier(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int, SimpleRef, ConfigurableRef))


# ============================================================================
# DISPATCHER
# ============================================================================

class ActionDispatcher:
    """Invokes actions by identifier."""

    def __init__(
        self,
        repository: ActionRepository,
        catalog: HandlerCatalog,
        config: Optional[ConfigStore] = None,
        audit: Optional[AuditSink] = None,
        defaults: Optional[DispatchDefaults] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            repository: Persistence adapter for configured instances
            catalog: Handler catalog for simple actions and callbacks
            config: Config store; ("actions", "max_stack") overrides the default
            audit: Audit sink, defaults to core.logging.log_audit
            defaults: Dispatch defaults, defaults to env-driven values
        """
        self.repository = repository
        self.catalog = catalog
        self.config = config or ConfigStore()
        self.audit = audit or log_audit
        self.defaults = defaults or get_defaults().dispatch

    @property
    def max_stack(self) -> int:
        """Deepest allowed nesting, read from config on every call."""
        return int(self.config.get("actions", "max_stack", self.defaults.max_stack))

    # =========================================================================
    # ENTRY POINT
    # =========================================================================

    def invoke(
        self,
        identifiers: Union[ActionRef, ActionKey, Iterable[Union[ActionRef, ActionKey]]],
        subject: Any = None,
        context: Optional[Mapping[str, Any]] = None,
        extra1: Any = None,
        extra2: Any = None,
    ) -> Dict[ActionKey, Any]:
        """
        Invoke one action or a batch of actions.

        Args:
            identifiers: A single identifier, or a list/tuple/set of them.
                int and ConfigurableRef address stored instances; str and
                SimpleRef address catalog entries.
            subject: Object the actions act upon, passed through unchanged
            context: Auxiliary data; should name the trigger under "hook"
            extra1: Passed through unchanged to every handler
            extra2: Passed through unchanged to every handler

        Returns:
            Result per identifier (FAILURE for unresolved ones). Empty if
            the recursion guard tripped.

        Raises:
            TypeError: a single identifier that is not a str, int or ActionRef
        """
        batch = _is_batch(identifiers)
        if not batch and not _is_identifier(identifiers):
            raise TypeError(f"Invalid action identifier: {identifiers!r}")

        _call_state.depth = current_depth() + 1
        try:
            depth = _call_state.depth
            limit = self.max_stack
            if depth > limit:
                self.audit(
                    "error",
                    "Stack overflow: too many calls to invoke() (depth {depth}, limit {limit}). "
                    "Aborting to prevent infinite recursion.",
                    {"depth": depth, "limit": limit},
                )
                return {}

            base_context = dict(context or {})
            hook = base_context.get(self.defaults.hook_key)
            if hook is None:
                logger.warning(f"invoke() called without '{self.defaults.hook_key}' in context")

            with log_context(hook=hook, depth=depth):
                if batch:
                    return self._invoke_batch(identifiers, subject, base_context, extra1, extra2)
                return self._invoke_batch([identifiers], subject, base_context, extra1, extra2)
        finally:
            _call_state.depth -= 1

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def _parse(self, value: Any) -> Optional[ActionRef]:
        try:
            return to_action_ref(value)
        except (TypeError, ValidationError):
            logger.warning(f"Ignoring invalid action identifier: {value!r}")
            return None

    def _invoke_batch(
        self,
        identifiers: Iterable[Any],
        subject: Any,
        context: Dict[str, Any],
        extra1: Any,
        extra2: Any,
    ) -> Dict[ActionKey, Any]:
        results: Dict[ActionKey, Any] = {}
        instance_ids: List[int] = []

        for value in identifiers:
            ref = self._parse(value)
            if ref is None:
                # Unhashable junk cannot key the result mapping
                if isinstance(value, (str, int)) and not isinstance(value, bool):
                    results[value] = FAILURE
            elif isinstance(ref, SimpleRef):
                if ref.identity not in results:
                    results[ref.identity] = self._invoke_simple(ref, subject, context, extra1, extra2)
            elif ref.aid not in instance_ids:
                instance_ids.append(ref.aid)

        if not instance_ids:
            return results

        rows = self._fetch_instances(instance_ids)
        for aid in instance_ids:
            results[aid] = self._invoke_instance(aid, rows.get(aid), subject, context, extra1, extra2)

        return results

    def _fetch_instances(self, aids: List[int]) -> Dict[int, ActionInstance]:
        """One round trip for every configured instance in the call."""
        try:
            if len(aids) == 1:
                row = self.repository.select_by_id(aids[0])
                rows = [row] if row is not None else []
            else:
                rows = self.repository.select_by_ids(aids)
        except RepositoryError as e:
            logger.error(f"Could not load action instances {aids}: {e}")
            return {}
        return {row.aid: row for row in rows}

    def _invoke_simple(
        self,
        ref: SimpleRef,
        subject: Any,
        context: Dict[str, Any],
        extra1: Any,
        extra2: Any,
    ) -> Any:
        descriptor = self.catalog.get_descriptor(ref.identity)
        handler = self.catalog.get_handler(descriptor.callback) if descriptor else None
        if handler is None:
            logger.warning(f"Action not found: {ref.identity}")
            return FAILURE
        return self._run(ref.identity, handler, subject, dict(context), extra1, extra2)

    def _invoke_instance(
        self,
        aid: int,
        row: Optional[ActionInstance],
        subject: Any,
        context: Dict[str, Any],
        extra1: Any,
        extra2: Any,
    ) -> Any:
        if row is None:
            logger.warning(f"Action instance not found: {aid}")
            return FAILURE

        handler = self.catalog.get_handler(row.callback)
        if handler is None:
            logger.warning(f"Handler '{row.callback}' for action {aid} is not registered")
            return FAILURE

        merged = {**context, **row.parameters}
        return self._run(aid, handler, subject, merged, extra1, extra2)

    def _run(
        self,
        key: ActionKey,
        handler: Callable,
        subject: Any,
        context: Dict[str, Any],
        extra1: Any,
        extra2: Any,
    ) -> Any:
        with log_context(action_id=key):
            try:
                return handler(subject, context, extra1, extra2)
            except Exception as e:
                logger.exception(f"Action {key} failed: {e}")
                return FAILURE


__all__ = [
    "ActionDispatcher",
    "current_depth",
]
