"""
snap adapter — Linux desktop applications.
"""

from __future__ import annotations

from mysys.adapters.base import PackageManager


class SnapManager(PackageManager):
    """Install packages with ``snap install``."""

    needs_sudo = True

    @property
    def name(self) -> str:
        return "snap"

    @property
    def executable(self) -> str:
        return "snap"

    def install_command(self, package_id: str) -> list[str]:
        return ["snap", "install", package_id]
