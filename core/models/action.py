# ============================================================================
# ACTION INSTANCE MODEL
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core model - Persisted action row
# PURPOSE: Stored handler instance with decoded parameters
# LAST_REVIEWED: 14 OCT 2026
# EXPORTS: ActionInstance, ActionSummary
# DEPENDENCIES: pydantic
# ============================================================================
"""
Action Instance Model

ActionInstance is one row of the action registry.

Key concept:
- HandlerDescriptor = DECLARATION (what the code provides)
- ActionInstance = ROW (what the registry knows, plus stored parameters)

Two kinds of rows share the table:
- aid is a str: a catalog identity inserted by synchronization
- aid is an int: a configured instance created by an explicit save
"""

from typing import Any, ClassVar, Dict, List, Optional, Set, Union

from pydantic import BaseModel, Field, field_validator

from core.contracts import ActionRef, ConfigurableKind, ConfigurableRef, SimpleRef


def _split_trigger_names(value: Any) -> Any:
    if value is None:
        return set()
    if isinstance(value, str):
        return {name for name in value.split() if name}
    return value


class ActionSummary(BaseModel):
    """
    Display view of an action: an instance or descriptor without parameters.
    """
    callback: Optional[str] = None
    label: str = ""
    type: str = "system"
    configurable: ConfigurableKind = ConfigurableKind.SIMPLE
    trigger_names: Set[str] = Field(default_factory=set)

    @field_validator("trigger_names", mode="before")
    @classmethod
    def _parse_trigger_names(cls, value: Any) -> Any:
        return _split_trigger_names(value)


class ActionInstance(BaseModel):
    """
    Persisted action row.

    Maps to: actions table
    Primary Key: aid
    """

    # =========================================================================
    # SQL DDL METADATA
    # =========================================================================
    __sql_table__: ClassVar[str] = "actions"
    __sql_primary_key__: ClassVar[List[str]] = ["aid"]

    aid: Union[int, str]
    type: str = Field(default="system", max_length=32)
    callback: str = Field(..., min_length=1, max_length=255)
    parameters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Decoded parameter mapping merged into the invocation context",
    )
    label: str = Field(default="", max_length=255)
    configurable: ConfigurableKind = ConfigurableKind.SIMPLE
    node_type: Optional[str] = Field(default=None, max_length=32)
    node_id: Optional[int] = None
    trigger_names: Set[str] = Field(default_factory=set)
    source_file: Optional[str] = None

    @field_validator("trigger_names", mode="before")
    @classmethod
    def _parse_trigger_names(cls, value: Any) -> Any:
        return _split_trigger_names(value)

    @field_validator("parameters", mode="before")
    @classmethod
    def _parse_parameters(cls, value: Any) -> Any:
        return value or {}

    @property
    def ref(self) -> ActionRef:
        """Tagged reference for this row."""
        if isinstance(self.aid, int):
            return ConfigurableRef(aid=self.aid)
        return SimpleRef(identity=self.aid)

    def summary(self) -> ActionSummary:
        return ActionSummary(
            callback=self.callback,
            label=self.label,
            type=self.type,
            configurable=self.configurable,
            trigger_names=set(self.trigger_names),
        )


__all__ = ["ActionInstance", "ActionSummary"]
