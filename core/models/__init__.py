# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# LAST_REVIEWED: 14 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

All Pydantic models for the action dispatch system.
"""

from core.models.descriptor import HandlerDescriptor
from core.models.action import ActionInstance, ActionSummary
from core.models.token import TokenMapEntry
from core.models.sync import SyncReport, SyncFailure

__all__ = [
    # Catalog
    "HandlerDescriptor",
    # Registry
    "ActionInstance",
    "ActionSummary",
    # Tokens
    "TokenMapEntry",
    # Synchronization
    "SyncReport",
    "SyncFailure",
]
