"""
Package manager base — the contract between the installer and the OS.

The installer only talks to package managers through this protocol,
never directly to apt, brew or snap.  A manager answers one question
with an exit code: "install this package".
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from collections.abc import Sequence

from mysys.adapters.runner import run_command

logger = logging.getLogger(__name__)


class PackageManager(ABC):
    """Abstract base class for all package managers.

    Managers perform external side effects and return exit codes.
    They NEVER raise — a launch failure is exit code 127.

    To add a package manager:
        1. Subclass PackageManager
        2. Implement name, executable, install_command
        3. Register it in the ManagerRegistry
    """

    needs_sudo: bool = False
    supports_repositories: bool = False

    def __init__(self, timeout: int | None = None):
        self.timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """The manager identifier (e.g., 'apt', 'brew', 'snap')."""

    @property
    @abstractmethod
    def executable(self) -> str:
        """Binary that must be on PATH for this manager to work."""

    @abstractmethod
    def install_command(self, package_id: str) -> list[str]:
        """Command list that installs ``package_id`` (without sudo)."""

    def is_available(self) -> bool:
        """Whether the manager's binary is on PATH. Never raises."""
        return shutil.which(self.executable) is not None

    def prepare(self) -> None:
        """Hook run before every install; no-op by default."""

    def add_repositories(self, repositories: Sequence[str]) -> int:
        """Register extra package sources and return an exit code.

        Only managers with ``supports_repositories`` override this.
        """
        return 0

    def install(self, package_id: str) -> int:
        """Install a package and return the manager's exit code."""
        self.prepare()
        result = run_command(
            self.install_command(package_id),
            needs_sudo=self.needs_sudo,
            timeout=self.timeout,
        )
        if not result["ok"]:
            logger.debug("%s install %s: %s", self.name, package_id, result["error"])
        return result["returncode"]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
