"""
Config use cases — show the resolved variables, validate the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mysys.adapters.registry import default_registry
from mysys.core.config.loader import ConfigError, load_settings
from mysys.core.config.spec_loader import load_catalog
from mysys.core.models.platform import OsFamily
from mysys.core.models.settings import Settings
from mysys.core.models.spec import SpecCatalog
from mysys.core.services.platform_detect import default_manager_for, detect_os_family


def redact_value(value: str) -> str:
    """Redact sensitive values for display."""
    if not value:
        return "(empty)"
    if len(value) <= 4:
        return "****"
    return value[:2] + "****" + value[-2:]


@dataclass
class ConfigShowResult:
    """Resolved variables and where each one came from."""

    settings: Settings | None = None
    error: str | None = None

    def to_dict(self, redact: bool = True) -> dict:
        if self.error or self.settings is None:
            return {"error": self.error}

        s = self.settings
        variables = []
        for key in sorted(s.variables):
            value = s.variables[key]
            if redact and s.is_secret(key):
                value = redact_value(value)
            variables.append({"key": key, "value": value, "tier": s.sources.get(key, "")})

        return {
            "home": str(s.home),
            "files": {tier: str(path) for tier, path in s.tier_files.items()},
            "specs_file": str(s.specs_file) if s.specs_file else None,
            "install_timeout": s.install_timeout,
            "refresh_index": s.refresh_index,
            "variables": variables,
        }


def show_config(home: Path | None = None) -> ConfigShowResult:
    """Load the variables cascade for display."""
    result = ConfigShowResult()
    try:
        result.settings = load_settings(home)
    except ConfigError as e:
        result.error = str(e)
    return result


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    settings: Settings | None = None
    catalog: SpecCatalog | None = None
    os_family: OsFamily | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "home": str(self.settings.home) if self.settings else None,
            "specs_file": (
                str(self.settings.specs_file)
                if self.settings and self.settings.specs_file else "built-in"
            ),
            "os": str(self.os_family) if self.os_family else None,
            "spec_count": len(self.catalog.specs) if self.catalog else 0,
            "groups": self.catalog.groups if self.catalog else [],
            "errors": self.errors,
            "warnings": self.warnings,
        }


def check_config(
    home: Path | None = None,
    os_family: OsFamily | None = None,
) -> ConfigCheckResult:
    """Validate settings and the package catalog and report issues."""
    result = ConfigCheckResult()

    try:
        settings = load_settings(home)
        result.settings = settings
        catalog = load_catalog(settings.specs_file)
        result.catalog = catalog
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if os_family is None:
        os_family = detect_os_family()
    result.os_family = os_family

    if not os_family.supported:
        result.errors.append("as of now not supporting this OS")
        return result

    # Every group must declare a spec for this OS
    for group in catalog.groups:
        if not catalog.declares_os(group, os_family):
            result.errors.append(f"Group '{group}' declares no '{os_family}' spec")

    registry = default_registry()
    known = set(registry.list_managers())
    for spec in catalog.specs:
        if not spec.packages:
            result.warnings.append(f"Spec '{spec.name}' is empty")
        if spec.manager and spec.manager not in known:
            result.errors.append(
                f"Spec '{spec.name}' uses unknown package manager '{spec.manager}'"
            )
        elif spec.repositories:
            manager = registry.get(spec.manager or default_manager_for(spec.os or os_family))
            if manager is not None and not manager.supports_repositories:
                result.errors.append(
                    f"Spec '{spec.name}' lists repositories but '{manager.name}' cannot add them"
                )

    # Managers needed on this machine should be on PATH
    needed: set[str] = set()
    for group in catalog.groups:
        for spec in catalog.select(group, os_family):
            if spec.packages:
                needed.add(spec.manager or default_manager_for(os_family))
    status = registry.manager_status()
    for name in sorted(needed & known):
        if not status[name]["available"]:
            result.warnings.append(
                f"Package manager '{name}' ({status[name]['executable']}) not on PATH"
            )

    result.valid = len(result.errors) == 0
    return result
