# ============================================================================
# CONFIGURATION STORE
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Namespaced runtime settings
# PURPOSE: get(namespace, key) lookups backed by a YAML file
# CREATED: 12 OCT 2026
# ============================================================================
"""
Configuration Store

Namespaced key/value settings read by the dispatcher (max_stack) and
the synchronizer (default trigger associations).

File format (YAML):

    actions:
      max_stack: 20
      publish_subject_triggers:
        subject_insert: true
        subject_update: false
    mailer:
      send_email_triggers: [user_login]

Usage:
    from core.config import ConfigStore

    config = ConfigStore.from_env()
    depth = config.get("actions", "max_stack", 35)
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)


class ConfigStore:
    """In-memory namespaced settings, optionally loaded from YAML."""

    def __init__(self, values: Optional[Dict[str, Dict[str, Any]]] = None):
        self._values: Dict[str, Dict[str, Any]] = copy.deepcopy(values) if values else {}

    def get(self, namespace: str, key: str, default: Any = None) -> Any:
        """
        Get a setting.

        Args:
            namespace: Owning module / namespace
            key: Setting name
            default: Returned when the setting is absent

        Returns:
            Stored value or default
        """
        return self._values.get(namespace, {}).get(key, default)

    def set(self, namespace: str, key: str, value: Any) -> None:
        """Set a setting (for programmatic use and tests)."""
        self._values.setdefault(namespace, {})[key] = value

    def namespaces(self) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self._values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ConfigStore":
        """
        Load settings from a YAML file.

        Raises:
            FileNotFoundError if the file does not exist
            ValueError if the top level is not a mapping of mappings
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config in {path}: top level must be a mapping")
        for namespace, values in data.items():
            if not isinstance(values, dict):
                raise ValueError(f"Invalid config in {path}: namespace '{namespace}' must be a mapping")

        logger.info(f"Loaded config from {path} ({len(data)} namespaces)")
        return cls(data)

    @classmethod
    def from_env(cls) -> "ConfigStore":
        """
        Load from ACTIONS_CONFIG_FILE if set, else return an empty store.
        """
        config_file = os.environ.get("ACTIONS_CONFIG_FILE")
        if not config_file:
            return cls()
        return cls.from_yaml(config_file)


__all__ = ["ConfigStore"]
