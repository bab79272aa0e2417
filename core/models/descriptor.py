# ============================================================================
# HANDLER DESCRIPTOR MODEL
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core model - Catalog entry
# PURPOSE: Describe a handler the running program knows about
# LAST_REVIEWED: 14 OCT 2026
# EXPORTS: HandlerDescriptor
# DEPENDENCIES: pydantic
# ============================================================================
"""
Handler Descriptor Model

A HandlerDescriptor is what the handler catalog declares about an action
at import time. It is never persisted by the dispatcher itself; the
synchronizer turns descriptors into ActionInstance rows.
"""

from typing import Optional

from pydantic import BaseModel, Field


class HandlerDescriptor(BaseModel):
    """
    Statically declared handler.

    identity is the catalog key. handler_name is the handler-of-record,
    only set when the callable is registered under a different name.
    """
    identity: str = Field(..., min_length=1, max_length=255)
    label: str = Field(default="", max_length=255)
    type: str = Field(default="system", max_length=32, description="Subject type, e.g. node, user, system")
    module: str = Field(default="actions", max_length=64, description="Owning module")
    handler_name: Optional[str] = Field(default=None, max_length=255)
    has_config_form: bool = False
    source_file: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def callback(self) -> str:
        """Name of the callable that runs this action."""
        return self.handler_name or self.identity


__all__ = ["HandlerDescriptor"]
