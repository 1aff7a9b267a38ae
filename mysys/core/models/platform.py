"""
Platform model — the closed set of OS families the installer knows.
"""

from __future__ import annotations

from enum import StrEnum


class OsFamily(StrEnum):
    """Operating system families.

    Derived once at process start by
    ``mysys.core.services.platform_detect.detect_os_family``.
    """

    LINUX = "linux"
    MACOS = "macos"
    UNSUPPORTED = "unsupported"

    @property
    def supported(self) -> bool:
        return self is not OsFamily.UNSUPPORTED
