"""
Homebrew adapter — macOS packages.
"""

from __future__ import annotations

from mysys.adapters.base import PackageManager


class BrewManager(PackageManager):
    """Install packages with ``brew install``. Never uses sudo."""

    @property
    def name(self) -> str:
        return "brew"

    @property
    def executable(self) -> str:
        return "brew"

    def install_command(self, package_id: str) -> list[str]:
        return ["brew", "install", package_id]
