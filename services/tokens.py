# ============================================================================
# TOKEN SERVICE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Opaque action tokens
# PURPOSE: Map action identities to tokens safe for forms, and back
# CREATED: 13 OCT 2026
# ============================================================================
"""
Token Service

Admin forms and listings carry a token instead of the raw action id. The
token is an MD5 hex digest of "<kind>:<key>", so the simple identity "42"
and the configured instance 42 get different tokens. Tokens are
deterministic, stable across restarts, and not reversible without a lookup.

Reverse lookup scans the catalog first, then configured instances.
Linear scans are fine here; this is admin traffic, not dispatch.
"""

import hashlib
import logging
from typing import Any, Dict, Mapping, Optional, Union

from core.contracts import ActionRef, ConfigurableKind, SimpleRef, to_action_ref
from core.models import ActionSummary, HandlerDescriptor, TokenMapEntry
from handlers.registry import HandlerCatalog
from repositories.base import ActionRepository

logger = logging.getLogger(__name__)

Identity = Union[ActionRef, int, str]


def tokenize(identity: Identity) -> str:
    """
    Opaque token for an action identity.

    str and SimpleRef hash as "simple:<identity>", int and ConfigurableRef
    as "configurable:<aid>".

    Raises:
        TypeError for anything that is not an action identifier
    """
    ref = to_action_ref(identity)
    return hashlib.md5(f"{ref.kind}:{ref.key}".encode("utf-8")).hexdigest()


def _as_summary(entry: Any) -> ActionSummary:
    if isinstance(entry, ActionSummary):
        return entry
    if isinstance(entry, HandlerDescriptor):
        return ActionSummary(
            callback=entry.callback,
            label=entry.label,
            type=entry.type,
            configurable=(
                ConfigurableKind.CONFIGURABLE_FORM
                if entry.has_config_form
                else ConfigurableKind.SIMPLE
            ),
        )
    if hasattr(entry, "summary"):
        return entry.summary()
    return ActionSummary.model_validate(entry)


def build_token_map(entries: Mapping[Union[int, str], Any]) -> Dict[str, TokenMapEntry]:
    """
    Token map over entries keyed by identity.

    Args:
        entries: identity -> ActionSummary, HandlerDescriptor,
                 ActionInstance or plain mapping

    Returns:
        token -> TokenMapEntry (callback defaults to the identity)
    """
    token_map: Dict[str, TokenMapEntry] = {}
    for identity, entry in entries.items():
        summary = _as_summary(entry)
        token = tokenize(identity)
        token_map[token] = TokenMapEntry(
            token=token,
            identity=identity,
            callback=summary.callback or str(identity),
            label=summary.label,
            type=summary.type,
            configurable=summary.configurable,
            trigger_names=set(summary.trigger_names),
        )
    return token_map


class TokenService:
    """Reverse lookup from token to identity over catalog and registry."""

    def __init__(self, catalog: HandlerCatalog, repository: ActionRepository):
        self.catalog = catalog
        self.repository = repository

    def reverse_lookup(self, token: str) -> Optional[ActionRef]:
        """
        Find the identity a token was derived from.

        Returns:
            SimpleRef for catalog identities, the row's ref for configured
            instances, None if nothing matches
        """
        for identity in self.catalog.list_all():
            if tokenize(identity) == token:
                return SimpleRef(identity=identity)

        for row in self.repository.select_where_parameters_non_empty():
            if tokenize(row.aid) == token:
                return row.ref

        logger.debug(f"No action matches token {token}")
        return None

    def catalog_token_map(self) -> Dict[str, TokenMapEntry]:
        return build_token_map(self.catalog.list_all())


__all__ = [
    "tokenize",
    "build_token_map",
    "TokenService",
]
