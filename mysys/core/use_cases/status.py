"""
Status use case — which packages of a group are present?

Probe-only: nothing is installed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mysys.core.config.loader import ConfigError, load_settings
from mysys.core.config.spec_loader import load_catalog, select_specs
from mysys.core.errors import MysysError, UnsupportedPlatformError
from mysys.core.models.platform import OsFamily
from mysys.core.services.platform_detect import detect_os_family
from mysys.core.services.probe import Probe, is_resolvable


@dataclass
class PackageStatus:
    package_id: str
    probe: str
    spec: str
    present: bool

    def to_dict(self) -> dict:
        return {
            "package": self.package_id,
            "probe": self.probe,
            "spec": self.spec,
            "present": self.present,
        }


@dataclass
class StatusResult:
    """Probe results for one group."""

    group: str = ""
    os_family: OsFamily | None = None
    packages: list[PackageStatus] = field(default_factory=list)
    error: str | None = None

    @property
    def missing(self) -> list[str]:
        return [p.package_id for p in self.packages if not p.present]

    @property
    def present(self) -> list[str]:
        return [p.package_id for p in self.packages if p.present]

    def to_dict(self) -> dict:
        if self.error:
            return {"group": self.group, "error": self.error}
        return {
            "group": self.group,
            "os": str(self.os_family) if self.os_family else None,
            "total": len(self.packages),
            "present": self.present,
            "missing": self.missing,
            "packages": [p.to_dict() for p in self.packages],
        }


def package_status(
    group: str,
    home: Path | None = None,
    os_family: OsFamily | None = None,
    probe: Probe | None = None,
) -> StatusResult:
    """Probe every package of ``group`` for the current OS."""
    result = StatusResult(group=group)
    probe = probe or is_resolvable

    try:
        settings = load_settings(home)
        catalog = load_catalog(settings.specs_file)
    except ConfigError as e:
        result.error = str(e)
        return result

    if os_family is None:
        os_family = detect_os_family()
    result.os_family = os_family

    try:
        if not os_family.supported:
            raise UnsupportedPlatformError()
        specs = select_specs(catalog, group, os_family)
    except MysysError as e:
        result.error = str(e)
        return result

    for spec in specs:
        for package_id, command in spec.packages.items():
            result.packages.append(PackageStatus(
                package_id=package_id,
                probe=command,
                spec=spec.name,
                present=probe(command),
            ))

    return result
