# ============================================================================
# API MODULE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API for action administration
# CREATED: 15 OCT 2026
# ============================================================================
"""
API Module

FastAPI routes for the action dispatch engine.
"""

from .routes import router, set_services
from .schemas import (
    InvokeRequest,
    InvokeResponse,
    InstanceCreate,
    InstanceResponse,
    TokenMapResponse,
)

__all__ = [
    "router",
    "set_services",
    "InvokeRequest",
    "InvokeResponse",
    "InstanceCreate",
    "InstanceResponse",
    "TokenMapResponse",
]
