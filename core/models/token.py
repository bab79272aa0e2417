# ============================================================================
# TOKEN MAP ENTRY MODEL
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core model - Derived, never persisted
# PURPOSE: Denormalized action view addressed by an opaque token
# LAST_REVIEWED: 14 OCT 2026
# EXPORTS: TokenMapEntry
# DEPENDENCIES: pydantic
# ============================================================================
"""
Token Map Entry

Forms and admin listings never expose raw action ids; they carry the
token instead and resolve it back through the token service.
"""

from typing import Set, Union

from pydantic import BaseModel, Field

from core.contracts import ConfigurableKind


class TokenMapEntry(BaseModel):
    """One entry of a token map, recomputed on demand."""
    token: str
    identity: Union[int, str]
    callback: str
    label: str = ""
    type: str = "system"
    configurable: ConfigurableKind = ConfigurableKind.SIMPLE
    trigger_names: Set[str] = Field(default_factory=set)


__all__ = ["TokenMapEntry"]
