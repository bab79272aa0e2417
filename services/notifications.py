# ============================================================================
# DELETION NOTIFICATIONS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Action deletion broadcast
# PURPOSE: Tell interested collaborators that an action row is gone
# CREATED: 13 OCT 2026
# ============================================================================
"""
Deletion Notifications

Anything holding references to action ids (trigger assignments, cached
forms, host modules) subscribes here and is told when a row is deleted.

Broadcast is fire-and-forget: a listener that raises is logged and the
remaining listeners still run.
"""

import logging
from typing import Callable, List, Union

logger = logging.getLogger(__name__)

DeletionListener = Callable[[Union[int, str]], None]


class DeletionNotifier:
    """Fan-out of on_action_deleted(aid) to subscribed listeners."""

    def __init__(self):
        self._listeners: List[DeletionListener] = []

    def subscribe(self, listener: DeletionListener) -> DeletionListener:
        """
        Register a listener. Usable as a decorator.

        Example:
            @notifier.subscribe
            def drop_assignments(aid):
                assignments.pop(aid, None)
        """
        if listener not in self._listeners:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: DeletionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def broadcast(self, aid: Union[int, str]) -> int:
        """
        Call every listener with the deleted id.

        Returns:
            Number of listeners that completed without raising
        """
        delivered = 0
        for listener in list(self._listeners):
            try:
                listener(aid)
                delivered += 1
            except Exception as e:
                logger.error(
                    f"Deletion listener {getattr(listener, '__name__', listener)!r} failed for {aid}: {e}",
                    exc_info=True,
                )
        logger.debug(f"Broadcast deletion of {aid} to {delivered}/{len(self._listeners)} listeners")
        return delivered

    def __len__(self) -> int:
        return len(self._listeners)


__all__ = ["DeletionListener", "DeletionNotifier"]
