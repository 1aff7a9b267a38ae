"""
Mock package manager — test double for every install operation.

Used in mock mode to simulate installs without touching the system.
Succeeds by default; can be configured to fail per package.
"""

from __future__ import annotations

from collections.abc import Sequence

from mysys.adapters.base import PackageManager


class MockPackageManager(PackageManager):
    """Package manager that records installs instead of running them."""

    supports_repositories = True

    def __init__(
        self,
        manager_name: str = "mock",
        available: bool = True,
        on_install=None,
    ):
        super().__init__()
        self._name = manager_name
        self._available = available
        self._exit_codes: dict[str, int] = {}
        self._call_log: list[str] = []
        self._repository_log: list[str] = []
        # Optional callback(package_id) run after a successful install,
        # e.g. to make a fake probe start resolving the package
        self._on_install = on_install

    @property
    def name(self) -> str:
        return self._name

    @property
    def executable(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[str]:
        """Every package id this mock was asked to install, in order."""
        return self._call_log

    @property
    def repository_log(self) -> list[str]:
        """Every repository this mock was asked to add, in order."""
        return self._repository_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def install_command(self, package_id: str) -> list[str]:
        return [self._name, "install", package_id]

    def set_exit_code(self, package_id: str, exit_code: int) -> None:
        """Make installing ``package_id`` (or adding that repository) return ``exit_code``."""
        self._exit_codes[package_id] = exit_code

    def set_failure(self, package_id: str, exit_code: int = 1) -> None:
        self.set_exit_code(package_id, exit_code)

    def add_repositories(self, repositories: Sequence[str]) -> int:
        for repository in repositories:
            self._repository_log.append(repository)
            exit_code = self._exit_codes.get(repository, 0)
            if exit_code != 0:
                return exit_code
        return 0

    def install(self, package_id: str) -> int:
        self._call_log.append(package_id)
        exit_code = self._exit_codes.get(package_id, 0)
        if exit_code == 0 and self._on_install is not None:
            self._on_install(package_id)
        return exit_code

    def reset(self) -> None:
        """Clear call logs and configured exit codes."""
        self._call_log.clear()
        self._repository_log.clear()
        self._exit_codes.clear()
