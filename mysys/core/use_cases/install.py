"""
Install use case — bring a package group to the desired state.

The full vertical slice from CLI intent to installed packages:
load settings, load the catalog, detect the OS, select specs,
build the manager registry, run the installer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from mysys.adapters.registry import ManagerRegistry, default_registry
from mysys.core.config.loader import ConfigError, load_settings
from mysys.core.config.spec_loader import load_catalog, select_specs
from mysys.core.errors import MysysError, UnsupportedPlatformError
from mysys.core.models.platform import OsFamily
from mysys.core.models.result import InstallReport
from mysys.core.models.settings import Settings
from mysys.core.services.installer import ensure
from mysys.core.services.platform_detect import detect_os_family
from mysys.core.services.probe import Probe, is_resolvable

logger = logging.getLogger(__name__)

GROUP_BASICS = "basics"
GROUP_TOOLS = "tools"


@dataclass
class InstallRunResult:
    """Result of installing a package group."""

    group: str = ""
    os_family: OsFamily | None = None
    settings: Settings | None = None
    specs: list[str] | None = None
    report: InstallReport | None = None
    mock: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.ok

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def to_dict(self) -> dict:
        result: dict = {
            "group": self.group,
            "os": str(self.os_family) if self.os_family else None,
            "mock": self.mock,
            "ok": self.ok,
        }
        if self.error:
            result["error"] = self.error
            return result

        result["specs"] = self.specs or []
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def install_group(
    group: str,
    home: Path | None = None,
    mock_mode: bool = False,
    os_family: OsFamily | None = None,
    settings: Settings | None = None,
    registry: ManagerRegistry | None = None,
    probe: Probe | None = None,
) -> InstallRunResult:
    """Ensure every package of ``group`` is installed.

    Args:
        group: Catalog group name ('basics', 'tools', …).
        home: mysys home folder (default: MYSYS_HOME or ~/.mysys).
        mock_mode: Record installs instead of running package managers.
        os_family: Override OS detection.
        settings: Pre-built settings (skips the cascade).
        registry: Pre-configured manager registry.
        probe: Probe override (default: PATH lookup).

    Returns:
        InstallRunResult; ``error`` is set on any fatal condition.
    """
    result = InstallRunResult(group=group, mock=mock_mode)

    # ── Settings + catalog ───────────────────────────────────────
    try:
        if settings is None:
            settings = load_settings(home)
        result.settings = settings
        catalog = load_catalog(settings.specs_file)
    except ConfigError as e:
        result.error = str(e)
        return result

    # ── Platform ─────────────────────────────────────────────────
    if os_family is None:
        os_family = detect_os_family()
    result.os_family = os_family

    try:
        if not os_family.supported:
            raise UnsupportedPlatformError()

        specs = select_specs(catalog, group, os_family)
        result.specs = [s.name for s in specs]

        if registry is None:
            registry = default_registry(
                timeout=settings.install_timeout,
                refresh_index=settings.refresh_index,
                mock_mode=mock_mode,
            )

        result.report = ensure(
            specs,
            os_family,
            probe=probe or is_resolvable,
            managers=registry,
        )
    except MysysError as e:
        logger.error("[install %s] %s", group, e)
        result.error = str(e)
        return result

    if result.report.failure:
        result.error = str(result.report.failure)

    return result
