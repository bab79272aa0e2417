# ============================================================================
# SYSTEM HANDLERS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Handler Module - Configurable system actions
# PURPOSE: Actions whose behaviour comes from stored parameters
# CREATED: 13 OCT 2026
# ============================================================================
"""
System Handlers

Configurable actions. Each has a settings form (registered as
"<name>_form") that validates parameters before they are stored; at
invocation time the stored parameters arrive merged into the context.

- log_message: write an audit entry built from a template
- set_field: assign a stored value to a field of the subject
"""

import logging
from typing import Any, Dict, MutableMapping

from core.logging import log_audit
from handlers.registry import register_action, register_form

logger = logging.getLogger(__name__)

SEVERITIES = ("debug", "info", "notice", "warning", "error", "critical")


# ============================================================================
# LOG MESSAGE
# ============================================================================

@register_action("log_message", label="Log a message", type="system", module="system")
def log_message(subject: Any, context: Dict[str, Any], a1: Any = None, a2: Any = None) -> bool:
    """
    Write the configured message to the audit log.

    The message template may reference any context key, e.g.
    "Subject saved during {hook}".
    """
    message = context.get("message")
    if not message:
        logger.warning("log_message invoked without a configured message")
        return False

    substitutions = {k: v for k, v in context.items() if isinstance(k, str)}
    log_audit(context.get("severity", "info"), message, substitutions)
    return True


@register_form("log_message")
def log_message_form(parameters: Dict[str, Any]) -> Dict[str, Any]:
    """Validate log_message settings."""
    message = str(parameters.get("message") or "").strip()
    if not message:
        raise ValueError("message is required")

    severity = str(parameters.get("severity") or "info").lower()
    if severity not in SEVERITIES:
        raise ValueError(f"severity must be one of {', '.join(SEVERITIES)}")

    return {"message": message, "severity": severity}


# ============================================================================
# SET FIELD
# ============================================================================

@register_action("set_field", label="Set a field on the subject", type="node", module="node")
def set_field(subject: MutableMapping[str, Any], context: Dict[str, Any], a1: Any = None, a2: Any = None) -> bool:
    field = context.get("field")
    if not field:
        return False
    subject[field] = context.get("value")
    return True


@register_form("set_field")
def set_field_form(parameters: Dict[str, Any]) -> Dict[str, Any]:
    """Validate set_field settings."""
    field = str(parameters.get("field") or "").strip()
    if not field:
        raise ValueError("field is required")
    return {"field": field, "value": parameters.get("value")}


__all__ = [
    "log_message",
    "log_message_form",
    "set_field",
    "set_field_form",
]
