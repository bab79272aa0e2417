# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core module initialization
# PURPOSE: Export core contracts and models
# LAST_REVIEWED: 14 OCT 2026
# ============================================================================

from core.contracts import (
    FAILURE,
    ConfigurableKind,
    SimpleRef,
    ConfigurableRef,
    ActionRef,
    to_action_ref,
)
from core.models import (
    HandlerDescriptor,
    ActionInstance,
    ActionSummary,
    TokenMapEntry,
    SyncReport,
)

__all__ = [
    # Contracts
    "FAILURE",
    "ConfigurableKind",
    "SimpleRef",
    "ConfigurableRef",
    "ActionRef",
    "to_action_ref",
    # Models
    "HandlerDescriptor",
    "ActionInstance",
    "ActionSummary",
    "TokenMapEntry",
    "SyncReport",
]
