# ============================================================================
# API SCHEMAS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Request/Response schemas
# PURPOSE: Pydantic models for API validation
# CREATED: 15 OCT 2026
# ============================================================================
"""
API Schemas

Request and response models for the admin API.

Result mappings keyed by int and str identifiers cannot survive as JSON
object keys, so invoke results travel as a list of identifier/result
pairs.
"""

from typing import Any, Dict, List, Literal, Optional, Set, Union
from pydantic import BaseModel, Field

from core.contracts import ConfigurableKind
from core.models import TokenMapEntry


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class InvokeRequest(BaseModel):
    """Request to invoke one or more actions."""
    identifiers: List[Union[int, str]] = Field(
        ...,
        min_length=1,
        description="Catalog identities (str) and configured instance ids (int)",
    )
    hook: str = Field(..., min_length=1, max_length=128, description="Trigger name")
    context: Dict[str, Any] = Field(default_factory=dict)
    subject: Optional[Dict[str, Any]] = Field(
        None,
        description="Object the actions act upon; returned after invocation",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "identifiers": ["publish_subject", 42],
                    "hook": "subject_update",
                    "subject": {"id": 7, "status": 0},
                }
            ]
        }
    }


class InstanceCreate(BaseModel):
    """Request to save a configured action instance."""
    callback: str = Field(..., min_length=1, max_length=255, description="Handler-of-record")
    type: str = Field(default="system", max_length=32)
    parameters: Dict[str, Any] = Field(default_factory=dict)
    label: str = Field(default="", max_length=255)
    aid: Optional[int] = Field(None, ge=0, description="Existing id to update")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "callback": "log_message",
                    "type": "system",
                    "label": "Log saves",
                    "parameters": {"message": "Saved during {hook}", "severity": "info"},
                }
            ]
        }
    }


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class InvokeResult(BaseModel):
    """Outcome of a single identifier."""
    identifier: Union[int, str]
    result: Any = None


class InvokeResponse(BaseModel):
    """Invoke response."""
    hook: str
    results: List[InvokeResult]
    subject: Optional[Dict[str, Any]] = None


class InstanceResponse(BaseModel):
    """Configured instance response."""
    aid: Union[int, str]
    type: str
    callback: str
    parameters: Dict[str, Any] = {}
    label: str = ""
    configurable: ConfigurableKind
    trigger_names: Set[str] = set()

    model_config = {"from_attributes": True}


class TokenMapResponse(BaseModel):
    """Token map response."""
    actions: Dict[str, TokenMapEntry]
    total: int


class LookupResponse(BaseModel):
    """Reverse token lookup response."""
    token: str
    kind: Literal["simple", "configurable"]
    identity: Union[int, str]


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None
    aid: Optional[Union[int, str]] = None
