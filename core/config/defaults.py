# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for dispatch, synchronization, storage
# CREATED: 12 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for dispatch and synchronization.
These can be overridden via environment variables or the config store.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from enum import Enum


class StorageBackend(str, Enum):
    """Where action rows live."""
    POSTGRES = "postgres"
    MEMORY = "memory"


@dataclass(frozen=True)
class DispatchDefaults:
    """
    Defaults for action invocation.

    max_stack is the deepest nesting of invoke() calls allowed on one
    thread before the recursion guard aborts.
    """
    max_stack: int = 35

    # Context key naming the trigger that caused a dispatch
    hook_key: str = "hook"

    @classmethod
    def from_env(cls) -> "DispatchDefaults":
        """Create from environment variables."""
        return cls(
            max_stack=int(os.getenv("ACTIONS_MAX_STACK", 35)),
        )


@dataclass(frozen=True)
class SyncDefaults:
    """
    Defaults for catalog/registry synchronization.
    """
    # Suffix of the companion settings-form callable
    form_suffix: str = "_form"

    # Config namespace that core-owned modules are folded into
    own_namespace: str = "actions"
    core_modules: Tuple[str, ...] = ("node", "user", "comment", "system", "taxonomy")

    # Config key suffix holding default trigger associations
    triggers_key_suffix: str = "_triggers"

    # Admin path shown next to the orphan summary
    orphan_remediation_path: str = "/api/v1/actions/orphans"

    delete_orphans_on_startup: bool = False

    @classmethod
    def from_env(cls) -> "SyncDefaults":
        """Create from environment variables."""
        return cls(
            delete_orphans_on_startup=os.getenv("ACTIONS_DELETE_ORPHANS", "false").lower() == "true",
        )


@dataclass(frozen=True)
class StorageDefaults:
    """
    Defaults for the persistence adapter.
    """
    backend: str = StorageBackend.POSTGRES.value
    db_schema: str = "actions"
    table: str = "actions"
    sequence: str = "actions_aid_seq"
    pool_min_size: int = 1
    pool_max_size: int = 5

    @classmethod
    def from_env(cls) -> "StorageDefaults":
        """Create from environment variables."""
        return cls(
            backend=os.getenv("ACTIONS_STORAGE", StorageBackend.POSTGRES.value).lower(),
            db_schema=os.getenv("ACTIONS_DB_SCHEMA", "actions"),
            pool_min_size=int(os.getenv("ACTIONS_POOL_MIN", 1)),
            pool_max_size=int(os.getenv("ACTIONS_POOL_MAX", 5)),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    dispatch: DispatchDefaults = field(default_factory=DispatchDefaults)
    sync: SyncDefaults = field(default_factory=SyncDefaults)
    storage: StorageDefaults = field(default_factory=StorageDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            dispatch=DispatchDefaults.from_env(),
            sync=SyncDefaults.from_env(),
            storage=StorageDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "StorageBackend",
    "DispatchDefaults",
    "SyncDefaults",
    "StorageDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
