"""
Install outcome models — what happened to each package.

One ``PackageOutcome`` per probed package; an ``InstallReport``
aggregates them into the run's exit status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel

from mysys.core.errors import InstallFailedError


class InstallResult(StrEnum):
    """Per-package outcome."""

    ALREADY_PRESENT = "already_present"
    INSTALLED = "installed"
    FAILED = "failed"


class PackageOutcome(BaseModel):
    """Outcome of ensuring a single package."""

    package_id: str
    probe: str
    spec: str
    manager: str = ""
    result: InstallResult
    exit_code: int | None = None    # None when no install was attempted
    duration_ms: int = 0

    @property
    def failed(self) -> bool:
        return self.result == InstallResult.FAILED


@dataclass
class InstallReport:
    """Aggregate result of one ``ensure`` pass."""

    outcomes: list[PackageOutcome] = field(default_factory=list)
    failure: InstallFailedError | None = None

    def record(self, outcome: PackageOutcome) -> None:
        self.outcomes.append(outcome)

    def _with(self, result: InstallResult) -> list[str]:
        return [o.package_id for o in self.outcomes if o.result == result]

    @property
    def already_present(self) -> list[str]:
        return self._with(InstallResult.ALREADY_PRESENT)

    @property
    def installed(self) -> list[str]:
        return self._with(InstallResult.INSTALLED)

    @property
    def failed(self) -> list[str]:
        return self._with(InstallResult.FAILED)

    @property
    def ok(self) -> bool:
        return self.failure is None and not self.failed

    @property
    def exit_code(self) -> int:
        """Process exit status: 0 when nothing failed, 1 otherwise."""
        return 0 if self.ok else 1

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "exit_code": self.exit_code,
            "total": len(self.outcomes),
            "already_present": self.already_present,
            "installed": self.installed,
            "failed": self.failed,
            "error": str(self.failure) if self.failure else None,
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
        }
