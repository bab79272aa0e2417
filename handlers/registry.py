# ============================================================================
# HANDLER REGISTRY
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Handler registration and lookup
# PURPOSE: Register and discover action handlers by name
# CREATED: 12 OCT 2026
# ============================================================================
"""
Handler Registry

The handler catalog: every action the running program provides, plus the
lookup table the dispatcher calls through.

Design:
- Handlers are registered at import time via decorator
- Two tables: callables by name, descriptors by identity
- A descriptor's handler-of-record defaults to its identity
- A settings form is a callable registered as "<callback>_form"
- Fail-fast on duplicate registration

Handler signature:
    handler(subject, context, extra1, extra2) -> Any

Form signature:
    form(parameters) -> Dict[str, Any]   (validated parameters)
"""

import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from core.config import get_defaults
from core.contracts import ConfigurableKind
from core.models import ActionSummary, HandlerDescriptor

logger = logging.getLogger(__name__)


# ============================================================================
# HANDLER TYPES
# ============================================================================

ActionFunc = Callable[[Any, Dict[str, Any], Any, Any], Any]
FormFunc = Callable[[Dict[str, Any]], Dict[str, Any]]


# ============================================================================
# EXCEPTIONS
# ============================================================================

class HandlerError(Exception):
    """Base exception for handler errors."""
    pass


class HandlerNotFoundError(HandlerError):
    """Raised when a handler is not found in the registry."""
    def __init__(self, handler_name: str):
        self.handler_name = handler_name
        super().__init__(f"Handler not found: {handler_name}")


class DuplicateHandlerError(HandlerError):
    """Raised when a handler name is already registered."""
    def __init__(self, handler_name: str):
        self.handler_name = handler_name
        super().__init__(f"Handler already registered: {handler_name}")


# ============================================================================
# CATALOG
# ============================================================================

def _source_file(func: Callable) -> Optional[str]:
    module = sys.modules.get(getattr(func, "__module__", ""), None)
    return getattr(module, "__file__", None)


class HandlerCatalog:
    """
    Statically declared handlers known to this process.

    Callables and descriptors are kept apart: forms and helper callables
    are resolvable by name without being catalog entries.
    """

    def __init__(self, form_suffix: Optional[str] = None):
        self.form_suffix = form_suffix or get_defaults().sync.form_suffix
        self._handlers: Dict[str, Callable] = {}
        self._descriptors: Dict[str, HandlerDescriptor] = {}

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def register(
        self,
        identity: str,
        func: ActionFunc,
        *,
        label: str = "",
        type: str = "system",
        module: str = "actions",
        handler_name: Optional[str] = None,
    ) -> HandlerDescriptor:
        """
        Add a handler to the catalog.

        Args:
            identity: Catalog key (must be unique)
            func: Callable run for this action
            label: Human-readable label
            type: Subject type the action acts on
            module: Owning module
            handler_name: Register the callable under this name instead

        Returns:
            The stored descriptor

        Raises:
            DuplicateHandlerError if identity or handler name is taken
        """
        if identity in self._descriptors:
            raise DuplicateHandlerError(identity)

        callback = handler_name or identity
        existing = self._handlers.get(callback)
        if existing is not None and existing is not func:
            raise DuplicateHandlerError(callback)

        self._handlers[callback] = func
        descriptor = HandlerDescriptor(
            identity=identity,
            label=label or identity,
            type=type,
            module=module,
            handler_name=handler_name,
            source_file=_source_file(func),
        )
        self._descriptors[identity] = descriptor

        logger.debug(f"Registered action: {identity} ({func.__module__}.{func.__name__})")
        return descriptor

    def register_callable(self, name: str, func: Callable) -> None:
        """
        Make a callable resolvable by name without adding a catalog entry.

        Raises:
            DuplicateHandlerError if the name is taken by another callable
        """
        existing = self._handlers.get(name)
        if existing is not None and existing is not func:
            raise DuplicateHandlerError(name)
        self._handlers[name] = func

    def action(
        self,
        identity: str,
        **meta: Any,
    ) -> Callable[[ActionFunc], ActionFunc]:
        """
        Decorator form of register().

        Example:
            @catalog.action("publish_subject", label="Publish", type="node", module="node")
            def publish_subject(subject, context, a1=None, a2=None):
                subject["status"] = 1
        """
        def decorator(func: ActionFunc) -> ActionFunc:
            self.register(identity, func, **meta)
            return func

        return decorator

    def form(self, callback: str) -> Callable[[FormFunc], FormFunc]:
        """
        Decorator registering the settings form for a handler-of-record.

        Example:
            @catalog.form("send_email")
            def send_email_form(parameters):
                return {"recipient": parameters["recipient"]}
        """
        def decorator(func: FormFunc) -> FormFunc:
            self.register_callable(self.form_name(callback), func)
            return func

        return decorator

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def form_name(self, callback: str) -> str:
        return f"{callback}{self.form_suffix}"

    def get_handler(self, name: str) -> Optional[Callable]:
        """
        Get a callable by name.

        Returns:
            Callable or None if not registered
        """
        return self._handlers.get(name)

    def get_handler_or_raise(self, name: str) -> Callable:
        """
        Get a callable by name, raising if not found.

        Raises:
            HandlerNotFoundError if not registered
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise HandlerNotFoundError(name)
        return handler

    def has_handler(self, name: str) -> bool:
        return name in self._handlers

    def get_form(self, callback: str) -> Optional[FormFunc]:
        return self._handlers.get(self.form_name(callback))

    def get_descriptor(self, identity: str) -> Optional[HandlerDescriptor]:
        descriptor = self._descriptors.get(identity)
        if descriptor is None:
            return None
        return self._resolve_form_flag(descriptor)

    def list_all(self) -> Dict[str, HandlerDescriptor]:
        """
        All catalog entries keyed by identity.

        has_config_form reflects forms registered after the action itself.
        """
        return {
            identity: self._resolve_form_flag(descriptor)
            for identity, descriptor in self._descriptors.items()
        }

    def summaries(self) -> Dict[str, ActionSummary]:
        """Catalog entries as display summaries, keyed by identity."""
        return {
            identity: ActionSummary(
                callback=descriptor.callback,
                label=descriptor.label,
                type=descriptor.type,
                configurable=(
                    ConfigurableKind.CONFIGURABLE_FORM
                    if descriptor.has_config_form
                    else ConfigurableKind.SIMPLE
                ),
            )
            for identity, descriptor in self.list_all().items()
        }

    def callbacks(self) -> List[str]:
        """Handler-of-record names of every catalog entry."""
        return [descriptor.callback for descriptor in self._descriptors.values()]

    def clear(self) -> None:
        """
        Clear all registered handlers.

        Primarily for testing.
        """
        self._handlers.clear()
        self._descriptors.clear()
        logger.debug("Cleared all handlers")

    def __contains__(self, identity: str) -> bool:
        return identity in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def _resolve_form_flag(self, descriptor: HandlerDescriptor) -> HandlerDescriptor:
        has_form = self.has_handler(self.form_name(descriptor.callback))
        if has_form == descriptor.has_config_form:
            return descriptor
        return descriptor.model_copy(update={"has_config_form": has_form})


# ============================================================================
# DEFAULT CATALOG
# ============================================================================

# Global catalog populated by handler modules at import time
_catalog = HandlerCatalog()


def get_catalog() -> HandlerCatalog:
    """Get the process-wide handler catalog."""
    return _catalog


def register_action(identity: str, **meta: Any) -> Callable[[ActionFunc], ActionFunc]:
    """Decorator registering an action in the default catalog."""
    return _catalog.action(identity, **meta)


def register_form(callback: str) -> Callable[[FormFunc], FormFunc]:
    """Decorator registering a settings form in the default catalog."""
    return _catalog.form(callback)


def get_handler(name: str) -> Optional[Callable]:
    return _catalog.get_handler(name)


def list_handlers() -> Dict[str, HandlerDescriptor]:
    return _catalog.list_all()


def clear_handlers() -> None:
    _catalog.clear()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ActionFunc",
    "FormFunc",
    "HandlerCatalog",
    "HandlerError",
    "HandlerNotFoundError",
    "DuplicateHandlerError",
    "get_catalog",
    "register_action",
    "register_form",
    "get_handler",
    "list_handlers",
    "clear_handlers",
]
