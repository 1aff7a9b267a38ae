"""
Spec loader — loads package specs from YAML.

The built-in catalog ships in ``mysys/core/data/catalogs/packages.yml``.
A ``packages.yml`` in the mysys home folder (or the file named by
MYSYS_SPECS_FILE) replaces it entirely.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from mysys.core.config.loader import ConfigError
from mysys.core.data import get_registry
from mysys.core.errors import ProbeCapabilityMissingError
from mysys.core.models.platform import OsFamily
from mysys.core.models.spec import PackageSpec, SpecCatalog

logger = logging.getLogger(__name__)


def parse_catalog(data: object, origin: str = "<catalog>") -> SpecCatalog:
    """Validate already-parsed YAML data into a SpecCatalog.

    Raises:
        ConfigError: If the data is not a valid catalog.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {origin}, got {type(data).__name__}")

    try:
        catalog = SpecCatalog.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid package catalog in {origin}: {e}") from e

    logger.debug("Loaded %d specs from %s", len(catalog.specs), origin)
    return catalog


def load_catalog(path: Path | None = None) -> SpecCatalog:
    """Load the package catalog.

    Args:
        path: User catalog file. None = the built-in catalog.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    if path is None:
        return parse_catalog(get_registry().package_catalog, origin="built-in catalog")

    if not path.is_file():
        raise ConfigError(f"Package catalog not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    catalog = parse_catalog(data, origin=str(path))
    logger.info("Using package catalog %s (%d specs)", path, len(catalog.specs))
    return catalog


def select_specs(
    catalog: SpecCatalog,
    group: str,
    os_family: OsFamily,
) -> list[PackageSpec]:
    """Pick the specs of ``group`` that apply to ``os_family``.

    The group must declare a spec for the detected OS, even an empty one;
    an undeclared OS is a precondition failure, not a silent no-op.

    Raises:
        ProbeCapabilityMissingError: If the group has no spec for the OS.
    """
    if not catalog.in_group(group):
        raise ProbeCapabilityMissingError(
            f"package specs for group '{group}'",
            f"known groups: {', '.join(catalog.groups) or 'none'}",
        )
    if not catalog.declares_os(group, os_family):
        raise ProbeCapabilityMissingError(
            f"a '{os_family}' spec in group '{group}'",
        )
    return catalog.select(group, os_family)
