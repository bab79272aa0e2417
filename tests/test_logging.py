# ============================================================================
# LOGGING TESTS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Tests - Structured logging and audit sink
# PURPOSE: Verify core/logging.py
# CREATED: 17 OCT 2026
# ============================================================================
"""
Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import json
import logging

from core.logging import (
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    log_audit,
    log_context,
)


def _record(msg="hello", extra=None):
    record = logging.LogRecord("services.dispatcher", logging.INFO, __file__, 10, msg, None, None)
    if extra is not None:
        record.extra = extra
    return record


class TestLogContext:
    """Thread-local context stack."""

    def test_nested_context_inherits_and_restores(self):
        with log_context(hook="subject_update", depth=1):
            with log_context(action_id=42):
                ctx = get_current_context()
                assert (ctx.hook, ctx.depth, ctx.action_id) == ("subject_update", 1, 42)
            assert get_current_context().action_id is None

        assert get_current_context().hook is None

    def test_to_dict_drops_empty_fields(self):
        with log_context(hook="h", extra={"request": "r1"}):
            assert get_current_context().to_dict() == {"hook": "h", "request": "r1"}


class TestFormatters:
    """JSON and human-readable output."""

    def test_structured_formatter(self):
        with log_context(hook="h", action_id="publish_subject"):
            output = StructuredFormatter().format(_record(extra={"audit": True}))

        data = json.loads(output)
        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["context"] == {"hook": "h", "action_id": "publish_subject"}
        assert data["data"] == {"audit": True}

    def test_human_formatter_shows_dispatch_context(self):
        with log_context(hook="h", action_id=7, depth=2):
            output = HumanFormatter().format(_record())

        assert "[hook=h, action=7, depth=2]" in output
        assert output.endswith("services.dispatcher [hook=h, action=7, depth=2]: hello")


class TestAudit:
    """log_audit fills templates and maps severities."""

    def test_template_filled(self, caplog):
        with caplog.at_level(logging.INFO, logger="audit"):
            log_audit("info", "Action '{action}' added.", {"action": "Publish"})

        record = caplog.records[-1]
        assert record.getMessage() == "Action 'Publish' added."
        assert record.extra == {"audit": True, "severity": "info", "action": "Publish"}

    def test_severity_mapping(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="audit"):
            log_audit("error", "Stack overflow")
            log_audit("notice", "Noted")

        assert [r.levelno for r in caplog.records[-2:]] == [logging.ERROR, logging.INFO]

    def test_missing_substitution_keeps_template(self, caplog):
        with caplog.at_level(logging.INFO, logger="audit"):
            log_audit("warning", "{count} orphaned actions", {})

        assert caplog.records[-1].getMessage() == "{count} orphaned actions"

    def test_bad_attribute_reference_keeps_template(self, caplog):
        with caplog.at_level(logging.INFO, logger="audit"):
            log_audit("info", "Saved during {hook.missing}", {"hook": "subject_update"})

        assert caplog.records[-1].getMessage() == "Saved during {hook.missing}"
