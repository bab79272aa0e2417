# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Foundation - Core enums and action references
# PURPOSE: Define the action identifier union and configurable kinds
# LAST_REVIEWED: 14 OCT 2026
# EXPORTS: ConfigurableKind, SimpleRef, ConfigurableRef, ActionRef, to_action_ref, FAILURE
# DEPENDENCIES: enum, pydantic
# ============================================================================
"""
Base contracts for the action dispatch system.

An action is addressed in one of two ways:
- SimpleRef: a stable handler identity ("publish_subject")
- ConfigurableRef: a numeric instance id pointing at a stored row

These cross every boundary (HTTP, SQL, dispatcher results), so they are
modelled explicitly instead of sniffing str vs int at each call site.
"""

from enum import IntEnum
from typing import Any, Literal, Union

from pydantic import BaseModel, Field


# Result recorded for an identifier that could not be resolved or failed.
FAILURE = False

# Key type used in result mappings and registry views
ActionKey = Union[int, str]


# ============================================================================
# ENUMS
# ============================================================================

class ConfigurableKind(IntEnum):
    """
    How an action is configured.

        SIMPLE              - no stored parameters
        ADVANCED            - stored parameters, no settings form
        CONFIGURABLE_FORM   - stored parameters edited through a settings form
    """
    SIMPLE = 0
    ADVANCED = 1
    CONFIGURABLE_FORM = 2


# ============================================================================
# ACTION REFERENCES
# ============================================================================

class SimpleRef(BaseModel):
    """Reference to a handler by its catalog identity."""
    kind: Literal["simple"] = "simple"
    identity: str = Field(..., min_length=1, max_length=255)

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        return self.identity


class ConfigurableRef(BaseModel):
    """Reference to a stored action instance by numeric id."""
    kind: Literal["configurable"] = "configurable"
    aid: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @property
    def key(self) -> int:
        return self.aid


ActionRef = Union[SimpleRef, ConfigurableRef]


def to_action_ref(value: Any) -> ActionRef:
    """
    Normalize a raw identifier into an ActionRef.

    int -> ConfigurableRef, str -> SimpleRef. A string that happens to
    look numeric ("42") is still a simple identity; callers wanting a
    stored instance must pass an int or a ConfigurableRef.

    Raises:
        TypeError for anything else (including bool)
    """
    if isinstance(value, (SimpleRef, ConfigurableRef)):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Invalid action identifier: {value!r}")
    if isinstance(value, int):
        return ConfigurableRef(aid=value)
    if isinstance(value, str):
        return SimpleRef(identity=value)
    raise TypeError(f"Invalid action identifier: {value!r}")


__all__ = [
    "FAILURE",
    "ActionKey",
    "ConfigurableKind",
    "SimpleRef",
    "ConfigurableRef",
    "ActionRef",
    "to_action_ref",
]
