# ============================================================================
# SUBJECT HANDLERS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Handler Module - Simple actions on a content subject
# PURPOSE: Flag toggles that need no stored configuration
# CREATED: 13 OCT 2026
# ============================================================================
"""
Subject Handlers

Simple actions acting on a mapping-like subject (a content record).
The dispatcher hands them the subject untouched; they mutate it in place
and report whether anything changed.

- publish_subject / unpublish_subject: status flag
- promote_subject / demote_subject: promoted flag
- make_sticky / make_unsticky: sticky flag
"""

import logging
from typing import Any, Dict, MutableMapping

from handlers.registry import register_action

logger = logging.getLogger(__name__)


def _set_flag(subject: MutableMapping[str, Any], field: str, value: int) -> bool:
    """Set a flag on the subject, returning True if it changed."""
    changed = subject.get(field) != value
    subject[field] = value
    if changed:
        logger.debug(f"Set {field}={value} on subject {subject.get('id')}")
    return changed


@register_action("publish_subject", label="Publish content", type="node", module="node")
def publish_subject(subject: MutableMapping[str, Any], context: Dict[str, Any], a1: Any = None, a2: Any = None) -> bool:
    return _set_flag(subject, "status", 1)


@register_action("unpublish_subject", label="Unpublish content", type="node", module="node")
def unpublish_subject(subject: MutableMapping[str, Any], context: Dict[str, Any], a1: Any = None, a2: Any = None) -> bool:
    return _set_flag(subject, "status", 0)


@register_action("promote_subject", label="Promote content to front page", type="node", module="node")
def promote_subject(subject: MutableMapping[str, Any], context: Dict[str, Any], a1: Any = None, a2: Any = None) -> bool:
    return _set_flag(subject, "promote", 1)


@register_action("demote_subject", label="Remove content from front page", type="node", module="node")
def demote_subject(subject: MutableMapping[str, Any], context: Dict[str, Any], a1: Any = None, a2: Any = None) -> bool:
    return _set_flag(subject, "promote", 0)


@register_action("make_sticky", label="Make content sticky", type="node", module="node")
def make_sticky(subject: MutableMapping[str, Any], context: Dict[str, Any], a1: Any = None, a2: Any = None) -> bool:
    return _set_flag(subject, "sticky", 1)


@register_action("make_unsticky", label="Make content unsticky", type="node", module="node")
def make_unsticky(subject: MutableMapping[str, Any], context: Dict[str, Any], a1: Any = None, a2: Any = None) -> bool:
    return _set_flag(subject, "sticky", 0)


__all__ = [
    "publish_subject",
    "unpublish_subject",
    "promote_subject",
    "demote_subject",
    "make_sticky",
    "make_unsticky",
]
