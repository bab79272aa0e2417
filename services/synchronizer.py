# ============================================================================
# ACTION SYNCHRONIZER
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Catalog / registry reconciliation
# PURPOSE: Insert rows for new catalog entries, report or remove orphans
# CREATED: 14 OCT 2026
# ============================================================================
"""
Action Synchronizer

Brings the persisted registry in line with the handler catalog.

Pass:
1. Read the catalog and every persisted row (fresh, no cache)
2. Catalog entries that already have a row are left alone; existing rows
   are never updated, so admin customisation survives
3. Catalog entries without a row get one, keyed by identity, with empty
   parameters and any default trigger names from config
4. Rows whose handler no longer exists are orphans: removed (one
   deletion notification each) or reported as a count plus list

Failures are per row: a row that cannot be inserted or deleted is
audited and recorded, and the pass continues. Re-running is safe.

Usage:
    synchronizer = ActionSynchronizer(repository, get_catalog(), config, notifier)
    report = synchronizer.synchronize(delete_orphans=False)
    print(report.orphan_count, report.orphans)
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from core.config import ConfigStore, SyncDefaults, get_defaults
from core.contracts import ConfigurableKind
from core.logging import AuditSink, log_audit, log_context
from core.models import ActionInstance, HandlerDescriptor, SyncFailure, SyncReport
from handlers.registry import HandlerCatalog
from repositories.base import ActionRepository
from services.notifications import DeletionNotifier

logger = logging.getLogger(__name__)


class ActionSynchronizer:
    """Reconciles the handler catalog with the action registry."""

    def __init__(
        self,
        repository: ActionRepository,
        catalog: HandlerCatalog,
        config: Optional[ConfigStore] = None,
        notifier: Optional[DeletionNotifier] = None,
        audit: Optional[AuditSink] = None,
        defaults: Optional[SyncDefaults] = None,
    ):
        self.repository = repository
        self.catalog = catalog
        self.config = config or ConfigStore()
        self.notifier = notifier if notifier is not None else DeletionNotifier()
        self.audit = audit or log_audit
        self.defaults = defaults or get_defaults().sync

    # =========================================================================
    # SYNCHRONIZE
    # =========================================================================

    def synchronize(self, delete_orphans: bool = False) -> SyncReport:
        """
        Run one synchronization pass.

        Args:
            delete_orphans: Remove orphaned rows instead of reporting them

        Returns:
            SyncReport with inserted ids, orphans, deleted ids and failures
        """
        report = SyncReport()

        with log_context(operation="synchronize"):
            descriptors = self.catalog.list_all()
            rows = {row.aid: row for row in self.repository.select_all()}
            candidates: Dict[Union[int, str], ActionInstance] = dict(rows)

            for identity, descriptor in descriptors.items():
                if identity in rows:
                    candidates.pop(identity, None)
                    continue
                self._insert(descriptor, report)

            known_callbacks = set(self.catalog.callbacks())
            report.orphans = [
                aid for aid, row in candidates.items()
                if row.callback not in known_callbacks
            ]

            if report.orphans:
                if delete_orphans:
                    self._delete_orphans(report)
                else:
                    self._report_orphans(report)

        logger.info(
            f"Synchronized actions: {len(report.inserted)} added, "
            f"{report.orphan_count} orphaned, {len(report.deleted)} removed, "
            f"{len(report.failures)} failed"
        )
        return report

    # =========================================================================
    # INSERTS
    # =========================================================================

    def _insert(self, descriptor: HandlerDescriptor, report: SyncReport) -> None:
        identity = descriptor.identity
        try:
            action = self.build_instance(descriptor)
            self.repository.insert(action)
        except Exception as e:
            logger.error(f"Failed to add action {identity}: {e}")
            self.audit(
                "error",
                "Could not add action '{action}': {error}",
                {"action": identity, "error": str(e)},
            )
            report.failures.append(SyncFailure(aid=identity, operation="insert", error=str(e)))
            return

        report.inserted.append(identity)
        self.audit("info", "Action '{action}' added.", {"action": action.label or identity, "aid": identity})

    def build_instance(self, descriptor: HandlerDescriptor) -> ActionInstance:
        """Row for a catalog entry that has none yet."""
        callback = descriptor.callback
        has_form = self.catalog.has_handler(f"{callback}{self.defaults.form_suffix}")
        namespace = self.trigger_namespace(descriptor.module)

        return ActionInstance(
            aid=descriptor.identity,
            type=descriptor.type,
            callback=callback,
            parameters={},
            label=descriptor.label,
            configurable=ConfigurableKind.CONFIGURABLE_FORM if has_form else ConfigurableKind.SIMPLE,
            trigger_names=self.default_trigger_names(namespace, descriptor.identity),
            source_file=descriptor.source_file,
        )

    def trigger_namespace(self, module: str) -> str:
        """Config namespace for a module; core modules fold into our own."""
        if module in self.defaults.core_modules:
            return self.defaults.own_namespace
        return module

    def default_trigger_names(self, namespace: str, identity: str) -> str:
        """
        Space-joined trigger names declared for an identity.

        The setting is a mapping of trigger -> flag (only truthy flags
        count), a list of trigger names, or an already space-joined string.
        """
        declared: Any = self.config.get(namespace, f"{identity}{self.defaults.triggers_key_suffix}")
        if not declared:
            return ""

        if isinstance(declared, str):
            names: List[str] = declared.split()
        elif isinstance(declared, Mapping):
            names = [str(name) for name, flag in declared.items() if flag]
        else:
            names = [str(name) for name in declared if name]

        return " ".join(names)

    # =========================================================================
    # ORPHANS
    # =========================================================================

    def _delete_orphans(self, report: SyncReport) -> None:
        for aid in report.orphans:
            try:
                removed = self.repository.delete(aid)
            except Exception as e:
                logger.error(f"Failed to remove orphaned action {aid}: {e}")
                self.audit(
                    "error",
                    "Could not remove orphaned action '{action}': {error}",
                    {"action": aid, "error": str(e)},
                )
                report.failures.append(SyncFailure(aid=aid, operation="delete", error=str(e)))
                continue

            if not removed:
                continue

            self.notifier.broadcast(aid)
            report.deleted.append(aid)
            self.audit("info", "Removed orphaned action '{action}' from database.", {"action": aid})

    def _report_orphans(self, report: SyncReport) -> None:
        self.audit(
            "warning",
            "{count} orphaned actions ({orphans}) exist in the actions table. "
            "Remove orphaned actions: {link}",
            {
                "count": report.orphan_count,
                "orphans": ", ".join(str(aid) for aid in report.orphans),
                "link": self.defaults.orphan_remediation_path,
            },
        )


__all__ = ["ActionSynchronizer"]
