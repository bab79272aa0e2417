# ============================================================================
# TOKEN SERVICE TESTS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Tests - Opaque action tokens
# PURPOSE: Verify services/tokens.py and services/registry_service.py
# CREATED: 16 OCT 2026
# ============================================================================
"""
Token Service Tests

Tokens are MD5 hex digests of an identity's kind and key; reverse lookup
scans the catalog, then configured instances.

Run with:
    pytest tests/test_tokens.py -v
"""

import hashlib

import pytest

from core.contracts import ConfigurableKind, ConfigurableRef, SimpleRef
from core.models import ActionInstance, ActionSummary
from handlers.registry import HandlerCatalog
from repositories import InMemoryActionRepository
from services.registry_service import RegistryService
from services.tokens import TokenService, build_token_map, tokenize


# ============================================================================
# FIXTURES
# ============================================================================

def _noop(subject, context, a1=None, a2=None):
    return True


def _make_catalog():
    catalog = HandlerCatalog()
    catalog.register("publish_subject", _noop, label="Publish content", type="node", module="node")
    catalog.register("send_email", _noop, label="Send e-mail", type="system", module="system")
    catalog.form("send_email")(lambda params: params)
    return catalog


def _make_repository():
    return InMemoryActionRepository([
        ActionInstance(aid="publish_subject", type="node", callback="publish_subject", label="Publish content"),
        ActionInstance(
            aid=42,
            type="system",
            callback="send_email",
            parameters={"recipient": "admin@example.com"},
            label="Mail the admin",
            configurable=ConfigurableKind.CONFIGURABLE_FORM,
            trigger_names="comment_insert",
        ),
    ])


# ============================================================================
# TOKENIZE
# ============================================================================

class TestTokenize:
    """Deterministic MD5 tokens."""

    def test_known_digest(self):
        assert tokenize(42) == hashlib.md5(b"configurable:42").hexdigest()
        assert tokenize("publish_subject") == hashlib.md5(b"simple:publish_subject").hexdigest()

    def test_int_and_numeric_string_differ(self):
        assert tokenize(42) != tokenize("42")

    def test_refs_hash_like_raw_identifiers(self):
        assert tokenize(SimpleRef(identity="publish_subject")) == tokenize("publish_subject")
        assert tokenize(ConfigurableRef(aid=7)) == tokenize(7)

    @pytest.mark.parametrize("value", [True, None, 4.2, ["x"]])
    def test_rejects_other_types(self, value):
        with pytest.raises(TypeError):
            tokenize(value)


# ============================================================================
# TOKEN MAPS
# ============================================================================

class TestTokenMap:
    """Token maps over summaries, descriptors and rows."""

    def test_callback_defaults_to_identity(self):
        token_map = build_token_map({"publish_subject": ActionSummary(label="Publish")})

        entry = token_map[tokenize("publish_subject")]
        assert entry.identity == "publish_subject"
        assert entry.callback == "publish_subject"
        assert entry.label == "Publish"

    def test_catalog_map_marks_form_actions(self):
        service = TokenService(_make_catalog(), _make_repository())

        token_map = service.catalog_token_map()

        assert token_map[tokenize("send_email")].configurable == ConfigurableKind.CONFIGURABLE_FORM
        assert token_map[tokenize("publish_subject")].configurable == ConfigurableKind.SIMPLE

    def test_registry_token_map(self):
        service = RegistryService(_make_repository())

        token_map = service.token_map()

        entry = token_map[tokenize(42)]
        assert entry.identity == 42
        assert entry.callback == "send_email"
        assert entry.trigger_names == {"comment_insert"}
        assert len(token_map) == 2

    def test_numeric_identity_and_instance_both_listed(self):
        repository = InMemoryActionRepository([
            ActionInstance(aid="42", type="system", callback="answer"),
            ActionInstance(aid=42, type="system", callback="answer", parameters={"x": 1}),
        ])

        token_map = RegistryService(repository).token_map()

        assert len(token_map) == 2
        assert token_map[tokenize("42")].identity == "42"
        assert token_map[tokenize(42)].identity == 42


# ============================================================================
# REVERSE LOOKUP
# ============================================================================

class TestReverseLookup:
    """Token back to identity."""

    def test_catalog_identity_round_trip(self):
        service = TokenService(_make_catalog(), _make_repository())

        assert service.reverse_lookup(tokenize("publish_subject")) == SimpleRef(identity="publish_subject")

    def test_configured_instance_round_trip(self):
        service = TokenService(_make_catalog(), _make_repository())

        assert service.reverse_lookup(tokenize(42)) == ConfigurableRef(aid=42)

    def test_numeric_identity_and_instance_round_trip(self):
        catalog = HandlerCatalog()
        catalog.register("42", _noop, handler_name="answer")
        repository = InMemoryActionRepository([
            ActionInstance(aid=42, type="system", callback="answer", parameters={"x": 1}),
        ])
        service = TokenService(catalog, repository)

        assert service.reverse_lookup(tokenize(42)) == ConfigurableRef(aid=42)
        assert service.reverse_lookup(tokenize("42")) == SimpleRef(identity="42")

    def test_unknown_token(self):
        service = TokenService(_make_catalog(), _make_repository())

        assert service.reverse_lookup(tokenize("nothing_here")) is None
        assert service.reverse_lookup("not-a-token") is None


# ============================================================================
# REGISTRY ACCESSORS
# ============================================================================

class TestRegistryService:
    """Read-only views over the repository."""

    def test_get_all_strips_parameters(self):
        summaries = RegistryService(_make_repository()).get_all()

        assert set(summaries) == {"publish_subject", 42}
        assert not hasattr(summaries[42], "parameters")
        assert summaries[42].label == "Mail the admin"

    def test_get_configurable(self):
        configured = RegistryService(_make_repository()).get_configurable()

        assert list(configured) == [42]
        assert configured[42].parameters == {"recipient": "admin@example.com"}

    def test_get_instance(self):
        service = RegistryService(_make_repository())

        assert service.get_instance(42).callback == "send_email"
        assert service.get_instance(99) is None
