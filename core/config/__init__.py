# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 12 OCT 2026
# ============================================================================
"""
Configuration Module

Provides env-driven defaults and the namespaced config store.
"""

from core.config.defaults import (
    StorageBackend,
    DispatchDefaults,
    SyncDefaults,
    StorageDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)
from core.config.store import ConfigStore

__all__ = [
    "StorageBackend",
    "DispatchDefaults",
    "SyncDefaults",
    "StorageDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
    "ConfigStore",
]
