"""
Package spec models — the declarative "what must be installed".

Loaded from ``packages.yml`` (built-in catalog or the user's override),
these are read-only for the rest of the run.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from mysys.core.models.platform import OsFamily

DEFAULT_GROUP = "basics"


class PackageSpec(BaseModel):
    """A named mapping of package identifier → probe command.

    ``os`` of None means the spec is common to every supported OS.
    Install order follows the mapping's declaration order.
    ``repositories`` are added to the manager before the first install.
    """

    name: str
    os: OsFamily | None = None
    group: str = DEFAULT_GROUP
    manager: str | None = None      # None = the OS default manager
    description: str = ""
    packages: dict[str, str] = Field(default_factory=dict)
    repositories: list[str] = Field(default_factory=list)  # e.g. "ppa:owner/name"

    @field_validator("packages", mode="before")
    @classmethod
    def _default_probe_to_package(cls, value: object) -> object:
        # ``vim:`` in YAML loads as None; probe for the package name itself
        if value is None:
            return {}
        if isinstance(value, dict):
            return {
                str(pkg): (str(probe) if probe not in (None, "") else str(pkg))
                for pkg, probe in value.items()
            }
        return value

    @field_validator("os")
    @classmethod
    def _reject_unsupported(cls, value: OsFamily | None) -> OsFamily | None:
        if value is OsFamily.UNSUPPORTED:
            raise ValueError("a spec cannot target the 'unsupported' OS family")
        return value

    def applies_to(self, os_family: OsFamily) -> bool:
        """Whether this spec is installed on the given OS family."""
        if not os_family.supported:
            return False
        return self.os is None or self.os == os_family

    @property
    def is_common(self) -> bool:
        return self.os is None


class SpecCatalog(BaseModel):
    """All package specs known to this run, in declaration order."""

    specs: list[PackageSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self) -> SpecCatalog:
        names = [s.name for s in self.specs]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"duplicate spec names: {', '.join(dupes)}")
        return self

    @property
    def groups(self) -> list[str]:
        """Group names in first-seen order."""
        return list(dict.fromkeys(s.group for s in self.specs))

    def in_group(self, group: str) -> list[PackageSpec]:
        return [s for s in self.specs if s.group == group]

    def select(self, group: str, os_family: OsFamily) -> list[PackageSpec]:
        """Specs of ``group`` for ``os_family``: common ones first, then OS-specific."""
        members = [s for s in self.in_group(group) if s.applies_to(os_family)]
        common = [s for s in members if s.is_common]
        specific = [s for s in members if not s.is_common]
        return common + specific

    def declares_os(self, group: str, os_family: OsFamily) -> bool:
        """Whether ``group`` has a spec declared specifically for ``os_family``."""
        return any(s.os == os_family for s in self.in_group(group))
