"""Adapters — bindings to the OS package managers.

Public re-exports for convenient access.
"""

from mysys.adapters.base import PackageManager
from mysys.adapters.mock import MockPackageManager
from mysys.adapters.registry import ManagerRegistry, default_registry

__all__ = [
    "ManagerRegistry",
    "MockPackageManager",
    "PackageManager",
    "default_registry",
]
