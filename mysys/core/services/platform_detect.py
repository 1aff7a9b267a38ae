"""
Platform detection — which OS family are we bootstrapping?

Read once at process start; the result does not change afterwards.
"""

from __future__ import annotations

import logging
import platform

from mysys.core.errors import UnsupportedPlatformError
from mysys.core.models.platform import OsFamily

logger = logging.getLogger(__name__)

_SYSTEM_FAMILIES: dict[str, OsFamily] = {
    "linux": OsFamily.LINUX,
    "darwin": OsFamily.MACOS,
}


def detect_os_family(system: str | None = None) -> OsFamily:
    """Map ``platform.system()`` onto an OsFamily.

    Args:
        system: Override for the reported system name (tests, dev scenarios).

    Returns:
        LINUX, MACOS, or UNSUPPORTED for anything else.
    """
    name = system if system is not None else platform.system()
    family = _SYSTEM_FAMILIES.get(name.strip().lower(), OsFamily.UNSUPPORTED)
    logger.info("running in %s (%s)", family.name, name or "unknown")
    return family


def default_manager_for(os_family: OsFamily) -> str:
    """Name of the package manager used when a spec does not pick one."""
    if os_family is OsFamily.LINUX:
        return "apt"
    if os_family is OsFamily.MACOS:
        return "brew"
    if os_family is OsFamily.UNSUPPORTED:
        raise UnsupportedPlatformError()
    raise ValueError(f"Unhandled OS family: {os_family!r}")
