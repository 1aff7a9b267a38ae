"""Package manager adapters for the supported operating systems."""

from mysys.adapters.system.apt import AptManager
from mysys.adapters.system.brew import BrewManager
from mysys.adapters.system.snap import SnapManager

__all__ = [
    "AptManager",
    "BrewManager",
    "SnapManager",
]
