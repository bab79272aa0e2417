# ============================================================================
# ACTION SERVICE TESTS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Tests - Configured instance lifecycle
# PURPOSE: Verify services/action_service.py and services/notifications.py
# CREATED: 16 OCT 2026
# ============================================================================
"""
Action Service Tests

Save / load / delete of configured instances and the deletion
notification fan-out.

Run with:
    pytest tests/test_action_service.py -v
"""

import pytest
from unittest.mock import MagicMock

from core.contracts import ConfigurableKind
from handlers.registry import HandlerCatalog, HandlerNotFoundError
from repositories import ActionNotFoundError, InMemoryActionRepository
from services.action_service import ActionService
from services.notifications import DeletionNotifier


# ============================================================================
# FIXTURES
# ============================================================================

def _noop(subject, context, a1=None, a2=None):
    return True


def _build_service():
    catalog = HandlerCatalog()
    catalog.register("send_email", _noop, type="system")
    catalog.register("archive", _noop, type="node")

    @catalog.form("send_email")
    def send_email_form(parameters):
        recipient = parameters.get("recipient")
        if not recipient or "@" not in recipient:
            raise ValueError("recipient must be an e-mail address")
        return {"recipient": recipient.lower()}

    repository = InMemoryActionRepository()
    notifier = DeletionNotifier()
    listener = MagicMock()
    notifier.subscribe(listener)
    return ActionService(repository, catalog, notifier), repository, listener


# ============================================================================
# SAVE
# ============================================================================

class TestSave:
    """Creating and updating configured instances."""

    def test_new_instances_get_sequential_ids(self):
        service, _, _ = _build_service()

        first = service.save("send_email", "system", {"recipient": "A@example.com"}, "Mail A")
        second = service.save("send_email", "system", {"recipient": "b@example.com"}, "Mail B")

        assert (first.aid, second.aid) == (1, 2)

    def test_form_normalizes_parameters(self):
        service, repository, _ = _build_service()

        action = service.save("send_email", "system", {"recipient": "A@Example.com", "junk": 1})

        assert action.configurable == ConfigurableKind.CONFIGURABLE_FORM
        assert repository.select_by_id(action.aid).parameters == {"recipient": "a@example.com"}
        assert action.label == "send_email"

    def test_form_rejection_raises_and_stores_nothing(self):
        service, repository, _ = _build_service()

        with pytest.raises(ValueError):
            service.save("send_email", "system", {"recipient": "nobody"})

        assert len(repository) == 0

    def test_without_form_is_advanced(self):
        service, _, _ = _build_service()

        action = service.save("archive", "node", {"days": 30}, "Archive old")

        assert action.configurable == ConfigurableKind.ADVANCED
        assert action.parameters == {"days": 30}

    def test_unknown_callback_raises(self):
        service, _, _ = _build_service()

        with pytest.raises(HandlerNotFoundError):
            service.save("vanished", "system", {})

    def test_update_existing(self):
        service, repository, _ = _build_service()
        action = service.save("archive", "node", {"days": 30}, "Archive old")

        updated = service.save("archive", "node", {"days": 60}, "Archive older", aid=action.aid)

        assert updated.aid == action.aid
        assert repository.select_by_id(action.aid).parameters == {"days": 60}
        assert repository.select_by_id(action.aid).label == "Archive older"
        assert len(repository) == 1

    def test_update_missing_raises(self):
        service, _, _ = _build_service()

        with pytest.raises(ActionNotFoundError):
            service.save("archive", "node", {"days": 1}, aid=99)


# ============================================================================
# LOAD / DELETE
# ============================================================================

class TestLoadDelete:
    """Loading and deleting instances."""

    def test_load(self):
        service, _, _ = _build_service()
        action = service.save("archive", "node", {"days": 30})

        assert service.load(action.aid).parameters == {"days": 30}

    def test_load_missing_raises(self):
        service, _, _ = _build_service()

        with pytest.raises(ActionNotFoundError):
            service.load(5)

    def test_delete_notifies_once(self):
        service, repository, listener = _build_service()
        action = service.save("archive", "node", {"days": 30})

        deleted = service.delete(action.aid)

        assert deleted.aid == action.aid
        assert repository.select_by_id(action.aid) is None
        listener.assert_called_once_with(action.aid)

    def test_delete_missing_raises_without_notifying(self):
        service, _, listener = _build_service()

        with pytest.raises(ActionNotFoundError):
            service.delete(5)

        listener.assert_not_called()


# ============================================================================
# NOTIFICATIONS
# ============================================================================

class TestDeletionNotifier:
    """Fan-out to listeners."""

    def test_failing_listener_does_not_block_others(self):
        notifier = DeletionNotifier()
        broken = MagicMock(side_effect=RuntimeError("listener down"))
        healthy = MagicMock()
        notifier.subscribe(broken)
        notifier.subscribe(healthy)

        delivered = notifier.broadcast(7)

        assert delivered == 1
        broken.assert_called_once_with(7)
        healthy.assert_called_once_with(7)

    def test_subscribe_is_idempotent_and_unsubscribe(self):
        notifier = DeletionNotifier()
        listener = MagicMock()

        notifier.subscribe(listener)
        notifier.subscribe(listener)
        assert len(notifier) == 1

        notifier.unsubscribe(listener)
        assert notifier.broadcast(7) == 0
        listener.assert_not_called()

    def test_subscribe_as_decorator(self):
        notifier = DeletionNotifier()
        seen = []

        @notifier.subscribe
        def record(aid):
            seen.append(aid)

        notifier.broadcast("old_action")

        assert seen == ["old_action"]
