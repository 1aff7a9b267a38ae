"""
Probe — is a package's command already available?

Read-only: a search-path lookup, nothing is executed.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable

logger = logging.getLogger(__name__)

Probe = Callable[[str], bool]


def is_resolvable(command: str) -> bool:
    """True if ``command`` resolves on PATH (the ``which`` check)."""
    path = shutil.which(command)
    if path:
        logger.debug("probe %s → %s", command, path)
        return True
    logger.debug("probe %s → not found", command)
    return False
