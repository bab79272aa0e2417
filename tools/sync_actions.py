#!/usr/bin/env python3
# ============================================================================
# CLI ACTION SYNCHRONIZATION TOOL
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Tool - Reconcile the action registry with the handler catalog
# PURPOSE: Run a synchronization pass without the HTTP API
# CREATED: 15 OCT 2026
# ============================================================================
"""
Synchronize the action registry with the handler catalog.

Does exactly what POST /api/v1/actions/sync does:
1. Inserts rows for catalog entries that have none
2. Reports orphaned rows, or removes them with --delete-orphans

Usage:
    # Report orphans
    python tools/sync_actions.py

    # Remove orphans
    python tools/sync_actions.py --delete-orphans

    # Dry exercise against an empty in-memory registry
    python tools/sync_actions.py --memory

Exit status is 1 if any row failed to insert or delete.

Requires:
    DATABASE_URL or POSTGRES_* env vars (unless --memory)
"""

import argparse
import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import ConfigStore, StorageBackend
from core.logging import configure_logging
from handlers import get_catalog
from repositories import open_repository, close_pool
from services import ActionSynchronizer


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Synchronize the action registry with the handler catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --delete-orphans
  %(prog)s --memory --json
        """,
    )
    parser.add_argument(
        "--delete-orphans", "-d",
        action="store_true",
        help="Remove orphaned rows instead of reporting them",
    )
    parser.add_argument(
        "--memory", "-m",
        action="store_true",
        help="Use an empty in-memory registry instead of PostgreSQL",
    )
    parser.add_argument(
        "--config", "-c",
        default=os.environ.get("ACTIONS_CONFIG_FILE"),
        help="YAML settings file (default: $ACTIONS_CONFIG_FILE)",
    )
    parser.add_argument(
        "--connection",
        help="PostgreSQL connection string (overrides environment)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the sync report as JSON",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    configure_logging(level="DEBUG" if args.verbose else "WARNING")

    try:
        config = ConfigStore.from_yaml(args.config) if args.config else ConfigStore()
    except (OSError, ValueError) as e:
        print(f"ERROR: Could not load config: {e}", file=sys.stderr)
        sys.exit(1)

    backend = StorageBackend.MEMORY.value if args.memory else None
    try:
        repository = open_repository(backend, connection_string=args.connection)
    except Exception as e:
        print(f"ERROR: Could not open action registry: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        synchronizer = ActionSynchronizer(repository, get_catalog(), config)
        report = synchronizer.synchronize(delete_orphans=args.delete_orphans)
    finally:
        close_pool()

    if args.json:
        print(json.dumps(report.model_dump(mode="json"), indent=2))
    else:
        print(f"Added:    {len(report.inserted)}")
        for aid in report.inserted:
            print(f"  + {aid}")
        print(f"Orphans:  {report.orphan_count}")
        for aid in report.orphans:
            marker = "-" if aid in report.deleted else "?"
            print(f"  {marker} {aid}")
        if report.orphans and not args.delete_orphans:
            print("  (run with --delete-orphans to remove)")
        print(f"Failures: {len(report.failures)}")
        for failure in report.failures:
            print(f"  ! {failure.aid} ({failure.operation}): {failure.error}")

    sys.exit(0 if report.success else 1)


if __name__ == "__main__":
    main()
