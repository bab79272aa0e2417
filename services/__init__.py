# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Business logic layer
# PURPOSE: Dispatch, synchronization and registry services
# CREATED: 13 OCT 2026
# ============================================================================
"""
Services Module

Business logic for action dispatch.
Services coordinate between the handler catalog and repositories.

Usage:
    from services import ActionDispatcher, ActionSynchronizer

    dispatcher = ActionDispatcher(repository, get_catalog())
    results = dispatcher.invoke(["publish_subject"], subject, {"hook": "save"})
"""

from .action_service import ActionService
from .dispatcher import ActionDispatcher, current_depth
from .notifications import DeletionListener, DeletionNotifier
from .registry_service import RegistryService
from .synchronizer import ActionSynchronizer
from .tokens import TokenService, build_token_map, tokenize

__all__ = [
    "ActionService",
    "ActionDispatcher",
    "current_depth",
    "DeletionListener",
    "DeletionNotifier",
    "RegistryService",
    "ActionSynchronizer",
    "TokenService",
    "build_token_map",
    "tokenize",
]
