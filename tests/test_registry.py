# ============================================================================
# HANDLER REGISTRY TESTS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Tests - Handler catalog and built-in handlers
# PURPOSE: Verify handlers/registry.py, handlers/subject.py, handlers/system.py
# CREATED: 16 OCT 2026
# ============================================================================
"""
Handler Registry Tests

Catalog registration rules on private HandlerCatalog instances, plus the
built-in handlers registered in the process-wide catalog.

Run with:
    pytest tests/test_registry.py -v
"""

import pytest

import handlers
from core.contracts import ConfigurableKind
from handlers.registry import (
    DuplicateHandlerError,
    HandlerCatalog,
    HandlerNotFoundError,
    get_catalog,
)
from handlers.subject import make_sticky, publish_subject, unpublish_subject
from handlers.system import log_message, log_message_form, set_field, set_field_form


def _noop(subject, context, a1=None, a2=None):
    return True


# ============================================================================
# CATALOG
# ============================================================================

class TestHandlerCatalog:
    """Registration and lookup."""

    def test_register_and_lookup(self):
        catalog = HandlerCatalog()
        descriptor = catalog.register("publish", _noop, label="Publish", type="node", module="node")

        assert descriptor.identity == "publish"
        assert descriptor.callback == "publish"
        assert descriptor.source_file is not None
        assert catalog.get_handler("publish") is _noop
        assert "publish" in catalog
        assert len(catalog) == 1

    def test_label_defaults_to_identity(self):
        catalog = HandlerCatalog()

        assert catalog.register("publish", _noop).label == "publish"

    def test_duplicate_identity_raises(self):
        catalog = HandlerCatalog()
        catalog.register("publish", _noop)

        with pytest.raises(DuplicateHandlerError):
            catalog.register("publish", lambda s, c, a1=None, a2=None: False)

    def test_duplicate_handler_name_raises(self):
        catalog = HandlerCatalog()
        catalog.register("first", _noop, handler_name="shared")

        with pytest.raises(DuplicateHandlerError):
            catalog.register("second", lambda s, c, a1=None, a2=None: False, handler_name="shared")

    def test_same_callable_may_back_two_identities(self):
        catalog = HandlerCatalog()
        catalog.register("first", _noop, handler_name="shared")
        catalog.register("second", _noop, handler_name="shared")

        assert catalog.callbacks() == ["shared", "shared"]

    def test_handler_name_separates_callback_from_identity(self):
        catalog = HandlerCatalog()
        catalog.register("publish_alias", _noop, handler_name="publish_impl")

        assert catalog.get_descriptor("publish_alias").callback == "publish_impl"
        assert catalog.get_handler("publish_impl") is _noop
        assert catalog.get_handler("publish_alias") is None

    def test_form_registered_after_action_is_reflected(self):
        catalog = HandlerCatalog()
        catalog.register("send_email", _noop)
        assert catalog.list_all()["send_email"].has_config_form is False

        @catalog.form("send_email")
        def send_email_form(parameters):
            return parameters

        assert catalog.list_all()["send_email"].has_config_form is True
        assert catalog.get_form("send_email") is send_email_form
        assert catalog.has_handler("send_email_form")
        assert "send_email_form" not in catalog

    def test_summaries(self):
        catalog = HandlerCatalog()
        catalog.register("publish", _noop, label="Publish", type="node")
        catalog.register("send_email", _noop, label="Mail", type="system")
        catalog.form("send_email")(lambda params: params)

        summaries = catalog.summaries()

        assert summaries["publish"].configurable == ConfigurableKind.SIMPLE
        assert summaries["send_email"].configurable == ConfigurableKind.CONFIGURABLE_FORM
        assert summaries["send_email"].callback == "send_email"

    def test_get_handler_or_raise(self):
        catalog = HandlerCatalog()

        with pytest.raises(HandlerNotFoundError):
            catalog.get_handler_or_raise("missing")

    def test_decorator_returns_function(self):
        catalog = HandlerCatalog()

        @catalog.action("decorated", label="Decorated")
        def decorated(subject, context, a1=None, a2=None):
            return "done"

        assert decorated(None, {}) == "done"
        assert catalog.get_descriptor("decorated").label == "Decorated"

    def test_clear(self):
        catalog = HandlerCatalog()
        catalog.register("publish", _noop)
        catalog.clear()

        assert len(catalog) == 0
        assert catalog.get_handler("publish") is None


# ============================================================================
# BUILT-IN HANDLERS
# ============================================================================

class TestBuiltinHandlers:
    """Handlers registered by importing the handlers package."""

    def test_default_catalog_populated(self):
        catalog = get_catalog()

        for identity in (
            "publish_subject", "unpublish_subject", "promote_subject",
            "demote_subject", "make_sticky", "make_unsticky",
            "log_message", "set_field",
        ):
            assert identity in catalog
        assert catalog.get_descriptor("log_message").has_config_form is True
        assert catalog.get_descriptor("publish_subject").has_config_form is False
        assert handlers.get_catalog() is catalog

    def test_subject_flags_report_change(self):
        subject = {"id": 1, "status": 0}

        assert publish_subject(subject, {}) is True
        assert subject["status"] == 1
        assert publish_subject(subject, {}) is False
        assert unpublish_subject(subject, {}) is True
        assert make_sticky(subject, {}) is True
        assert subject["sticky"] == 1

    def test_set_field(self):
        subject = {}

        assert set_field(subject, {"field": "title", "value": "Hello"}) is True
        assert subject == {"title": "Hello"}
        assert set_field(subject, {}) is False

    def test_set_field_form(self):
        assert set_field_form({"field": " title ", "value": 3}) == {"field": "title", "value": 3}
        with pytest.raises(ValueError):
            set_field_form({"value": 3})

    def test_log_message_form(self):
        assert log_message_form({"message": "Saved", "severity": "WARNING"}) == {
            "message": "Saved",
            "severity": "warning",
        }
        assert log_message_form({"message": "Saved"})["severity"] == "info"
        with pytest.raises(ValueError):
            log_message_form({"message": ""})
        with pytest.raises(ValueError):
            log_message_form({"message": "x", "severity": "loud"})

    def test_log_message_writes_audit(self, caplog):
        with caplog.at_level("INFO", logger="audit"):
            result = log_message(None, {"hook": "subject_update", "message": "Saved during {hook}"})

        assert result is True
        assert "Saved during subject_update" in caplog.text

    def test_log_message_without_message(self):
        assert log_message(None, {"hook": "h"}) is False

    def test_log_message_with_unresolvable_template(self, caplog):
        with caplog.at_level("INFO", logger="audit"):
            result = log_message(None, {"hook": "h", "message": "Saved during {hook.missing}"})

        assert result is True
        assert "Saved during {hook.missing}" in caplog.text
