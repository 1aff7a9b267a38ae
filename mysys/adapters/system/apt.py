"""
apt adapter — Debian/Ubuntu packages.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mysys.adapters.base import PackageManager
from mysys.adapters.runner import run_command

logger = logging.getLogger(__name__)


class AptManager(PackageManager):
    """Install packages with ``apt-get``.

    The package index is refreshed once, right before the first
    install of the run, so runs where everything is already present
    never touch the network.  Adding a repository (a PPA) forces one
    more refresh before the next install, even with ``refresh_index``
    off.
    """

    needs_sudo = True
    supports_repositories = True

    def __init__(self, timeout: int | None = None, refresh_index: bool = True):
        super().__init__(timeout=timeout)
        self.refresh_index = refresh_index
        self._refreshed = False
        self._index_stale = False
        self._repositories: set[str] = set()

    @property
    def name(self) -> str:
        return "apt"

    @property
    def executable(self) -> str:
        return "apt-get"

    def install_command(self, package_id: str) -> list[str]:
        return ["apt-get", "install", "-y", package_id]

    def refresh_command(self) -> list[str]:
        return ["apt-get", "update"]

    def repository_command(self, repository: str) -> list[str]:
        return ["add-apt-repository", "-y", repository]

    def add_repositories(self, repositories: Sequence[str]) -> int:
        for repository in repositories:
            if repository in self._repositories:
                continue
            logger.info("[apt] adding repository %s", repository)
            result = run_command(
                self.repository_command(repository),
                needs_sudo=self.needs_sudo,
                timeout=self.timeout,
            )
            if not result["ok"]:
                logger.error("[apt] could not add repository %s: %s", repository, result["error"])
                return result["returncode"]
            self._repositories.add(repository)
            self._index_stale = True
        return 0

    def prepare(self) -> None:
        if not self._index_stale and (not self.refresh_index or self._refreshed):
            return
        self._refreshed = True
        self._index_stale = False
        logger.info("[apt] refreshing package index")
        result = run_command(
            self.refresh_command(),
            needs_sudo=self.needs_sudo,
            timeout=self.timeout,
        )
        if not result["ok"]:
            logger.warning("[apt] could not refresh package index: %s", result["error"])
