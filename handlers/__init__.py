# ============================================================================
# HANDLER REGISTRY
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Handler registration and lookup
# PURPOSE: Register and discover action handlers
# CREATED: 12 OCT 2026
# ============================================================================
"""
Handler Registry

Provides a decorator-based registration system for action handlers.

Usage:
    from handlers import register_action, get_catalog

    @register_action("my_action", label="Do the thing", type="node")
    def my_action(subject, context, a1=None, a2=None):
        return True

    # Later, to resolve:
    handler = get_catalog().get_handler("my_action")
"""

from handlers.registry import (
    ActionFunc,
    FormFunc,
    HandlerCatalog,
    HandlerError,
    HandlerNotFoundError,
    DuplicateHandlerError,
    get_catalog,
    register_action,
    register_form,
    get_handler,
    list_handlers,
    clear_handlers,
)

# Import handler modules to trigger registration
import handlers.subject  # noqa: F401 - import for side effects
import handlers.system  # noqa: F401 - import for side effects

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
