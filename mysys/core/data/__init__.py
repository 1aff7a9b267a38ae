"""
Central data registry for the built-in catalogs.

Loads base catalogs from ``mysys/core/data/catalogs/`` once at first
access and caches them for the process lifetime.

Usage::

    from mysys.core.data import get_registry

    raw = get_registry().package_catalog   # dict parsed from packages.yml
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

PACKAGE_CATALOG = "catalogs/packages.yml"


def data_path(relative_path: str) -> Path:
    """Absolute path of a file shipped in the data directory."""
    return _DATA_DIR / relative_path


def _load_yaml(relative_path: str) -> dict:
    """Load a YAML mapping relative to the data directory."""
    path = data_path(relative_path)
    if not path.exists():
        logger.warning("Data file not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


class DataRegistry:
    """Registry for the static catalogs shipped with the package.

    Each property lazily loads its file on first access and caches
    the result for the lifetime of the instance.
    """

    @cached_property
    def package_catalog(self) -> dict:
        """Built-in package specs (common, linux, macos, tools)."""
        data = _load_yaml(PACKAGE_CATALOG)
        logger.debug("Loaded %d built-in package specs", len(data.get("specs", [])))
        return data


_registry: DataRegistry | None = None


def get_registry() -> DataRegistry:
    """Module-level singleton accessor."""
    global _registry
    if _registry is None:
        _registry = DataRegistry()
    return _registry
