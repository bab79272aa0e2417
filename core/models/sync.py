# ============================================================================
# SYNC REPORT MODEL
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core model - Synchronization outcome
# PURPOSE: Report what a synchronization pass inserted, found and removed
# LAST_REVIEWED: 14 OCT 2026
# EXPORTS: SyncReport, SyncFailure
# DEPENDENCIES: pydantic
# ============================================================================
"""
Sync Report Model

Returned by ActionSynchronizer.synchronize(). The orphan list and count
are what the admin surface shows next to its remediation link.
"""

from typing import List, Union

from pydantic import BaseModel, Field, computed_field


class SyncFailure(BaseModel):
    """A single row that could not be inserted or deleted."""
    aid: Union[int, str]
    operation: str
    error: str


class SyncReport(BaseModel):
    """Outcome of one synchronization pass."""
    inserted: List[Union[int, str]] = Field(default_factory=list)
    orphans: List[Union[int, str]] = Field(default_factory=list)
    deleted: List[Union[int, str]] = Field(default_factory=list)
    failures: List[SyncFailure] = Field(default_factory=list)

    @computed_field
    @property
    def orphan_count(self) -> int:
        return len(self.orphans)

    @property
    def success(self) -> bool:
        return not self.failures


__all__ = ["SyncReport", "SyncFailure"]
