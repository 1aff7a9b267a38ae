"""
Idempotent declarative installer.

Given the package specs for the detected OS, make sure every package is
present: probe first, install only what is missing, and stop the whole
run at the first failed install.

Re-running after a partial success only attempts the packages that
are still missing, so the operator's recovery path is "fix, re-run".
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from mysys.adapters.base import PackageManager
from mysys.adapters.registry import ManagerRegistry
from mysys.core.errors import (
    InstallFailedError,
    ProbeCapabilityMissingError,
    UnsupportedPlatformError,
)
from mysys.core.models.platform import OsFamily
from mysys.core.models.result import InstallReport, InstallResult, PackageOutcome
from mysys.core.models.spec import PackageSpec
from mysys.core.services.platform_detect import default_manager_for
from mysys.core.services.probe import Probe

logger = logging.getLogger(__name__)


def _check_preconditions(
    specs: Sequence[PackageSpec],
    os_family: OsFamily,
    probe: Probe | None,
    managers: ManagerRegistry | None,
) -> dict[str, PackageManager]:
    """Fail before any side effect; return spec name → resolved manager."""
    if not os_family.supported:
        raise UnsupportedPlatformError()
    if probe is None:
        raise ProbeCapabilityMissingError("a probe capability")
    if managers is None:
        raise ProbeCapabilityMissingError("a package manager registry")

    resolved: dict[str, PackageManager] = {}
    for spec in specs:
        manager = managers.resolve(spec.manager, os_family)
        if manager is None:
            raise ProbeCapabilityMissingError(
                f"package manager '{spec.manager or default_manager_for(os_family)}'",
                f"needed by spec '{spec.name}'",
            )
        if spec.repositories and not manager.supports_repositories:
            raise ProbeCapabilityMissingError(
                "a package manager that can add repositories",
                f"'{manager.name}' cannot add those of spec '{spec.name}'",
            )
        resolved[spec.name] = manager
    return resolved


def ensure(
    specs: Sequence[PackageSpec],
    os_family: OsFamily,
    *,
    probe: Probe | None,
    managers: ManagerRegistry | None,
) -> InstallReport:
    """Make every package of ``specs`` present on this machine.

    Args:
        specs: Specs applicable to ``os_family``, in install order.
        os_family: The detected OS family.
        probe: ``probe(command) -> bool``; True when already available.
        managers: Registry resolving each spec's package manager.

    Returns:
        InstallReport. On the first failed install (or repository setup)
        the report carries ``failure`` and no further package is probed
        or installed.

    Raises:
        UnsupportedPlatformError: ``os_family`` is UNSUPPORTED.
        ProbeCapabilityMissingError: probe, registry, or a spec's manager
            is missing, or the manager cannot add the spec's repositories.
    """
    resolved = _check_preconditions(specs, os_family, probe, managers)
    report = InstallReport()

    for spec in specs:
        manager = resolved[spec.name]
        # Repositories are added lazily, before the spec's first install
        sources_ready = not spec.repositories
        for package_id, command in spec.packages.items():
            if probe(command):
                logger.debug("%s is already installed - skipping", package_id)
                report.record(PackageOutcome(
                    package_id=package_id,
                    probe=command,
                    spec=spec.name,
                    manager=manager.name,
                    result=InstallResult.ALREADY_PRESENT,
                ))
                continue

            start = time.monotonic()
            exit_code = 0
            if not sources_ready:
                logger.info("adding repositories: %s", ", ".join(spec.repositories))
                exit_code = manager.add_repositories(spec.repositories)
                sources_ready = exit_code == 0
            if exit_code == 0:
                logger.info("adding: %s (%s)", package_id, manager.name)
                exit_code = manager.install(package_id)
            elapsed_ms = int((time.monotonic() - start) * 1000)

            if exit_code != 0:
                report.record(PackageOutcome(
                    package_id=package_id,
                    probe=command,
                    spec=spec.name,
                    manager=manager.name,
                    result=InstallResult.FAILED,
                    exit_code=exit_code,
                    duration_ms=elapsed_ms,
                ))
                report.failure = InstallFailedError(package_id, exit_code)
                logger.error("could not install: %s (exit %d)", package_id, exit_code)
                return report

            report.record(PackageOutcome(
                package_id=package_id,
                probe=command,
                spec=spec.name,
                manager=manager.name,
                result=InstallResult.INSTALLED,
                exit_code=0,
                duration_ms=elapsed_ms,
            ))

    logger.info(
        "ensured %d packages (%d installed, %d already present)",
        len(report.outcomes), len(report.installed), len(report.already_present),
    )
    return report
