"""
Manager registry — central lookup for package managers.

The installer never instantiates managers itself; it asks the
registry which manager handles a spec on the detected OS.
"""

from __future__ import annotations

import logging
from typing import Any

from mysys.adapters.base import PackageManager
from mysys.adapters.mock import MockPackageManager
from mysys.core.models.platform import OsFamily
from mysys.core.services.platform_detect import default_manager_for

logger = logging.getLogger(__name__)


class ManagerRegistry:
    """Registry of package managers keyed by name.

    Features:
        - Register managers by name
        - Resolve a spec's manager, falling back to the OS default
        - Mock mode: every lookup returns one shared mock manager
    """

    def __init__(self, mock_mode: bool = False, mock_manager: PackageManager | None = None):
        self._managers: dict[str, PackageManager] = {}
        self._mock_mode = mock_mode
        self._mock_manager = mock_manager

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    @property
    def mock_manager(self) -> PackageManager:
        if self._mock_manager is None:
            self._mock_manager = MockPackageManager()
        return self._mock_manager

    def register(self, manager: PackageManager) -> None:
        """Register a manager under its own name."""
        name = manager.name
        if name in self._managers:
            logger.warning("Overwriting existing package manager: %s", name)
        self._managers[name] = manager
        logger.debug("Registered package manager: %s", name)

    def get(self, name: str) -> PackageManager | None:
        """Look up a manager by name (the mock, in mock mode)."""
        if self._mock_mode:
            return self.mock_manager
        return self._managers.get(name)

    def list_managers(self) -> list[str]:
        return list(self._managers.keys())

    def resolve(self, manager_name: str | None, os_family: OsFamily) -> PackageManager | None:
        """Manager for a spec: its explicit ``manager`` or the OS default."""
        return self.get(manager_name or default_manager_for(os_family))

    def manager_status(self) -> dict[str, dict[str, Any]]:
        """Availability of every registered manager."""
        status = {}
        for name, manager in self._managers.items():
            try:
                available = manager.is_available()
            except Exception:
                available = False
            status[name] = {
                "name": name,
                "available": available,
                "type": manager.__class__.__name__,
                "executable": manager.executable,
            }
        return status


def default_registry(
    timeout: int | None = None,
    refresh_index: bool = True,
    mock_mode: bool = False,
) -> ManagerRegistry:
    """Registry with the apt, brew and snap adapters registered."""
    from mysys.adapters.system import AptManager, BrewManager, SnapManager

    registry = ManagerRegistry(mock_mode=mock_mode)
    registry.register(AptManager(timeout=timeout, refresh_index=refresh_index))
    registry.register(BrewManager(timeout=timeout))
    registry.register(SnapManager(timeout=timeout))
    return registry
