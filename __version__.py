# ============================================================================
# VERSION - ACTION DISPATCH
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# ============================================================================
"""
Version information for the action dispatch service.

This is the single source of truth for the application version.
Updated manually for each release.
"""
# Version format: major.minor.patch
# Criteria for 0.3 - synchronization with orphan removal
__version__ = "0.3.1"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-12"

EPOCH = 1
CODENAME = "Action Dispatch"
