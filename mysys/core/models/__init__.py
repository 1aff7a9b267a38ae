"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from mysys.core.models import OsFamily, PackageSpec, SpecCatalog, Settings
"""

from mysys.core.models.platform import OsFamily
from mysys.core.models.result import InstallReport, InstallResult, PackageOutcome
from mysys.core.models.settings import Settings
from mysys.core.models.spec import PackageSpec, SpecCatalog

__all__ = [
    # platform.py
    "OsFamily",
    # result.py
    "InstallReport",
    "InstallResult",
    "PackageOutcome",
    # settings.py
    "Settings",
    # spec.py
    "PackageSpec",
    "SpecCatalog",
]
