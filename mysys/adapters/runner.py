"""
Command runner — the single place ``subprocess.run`` is called for
package manager operations.

Never raises: every outcome is a result dict with a return code.
Launch failures map to 127 and timeouts to 124, the same codes a
shell would report.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)

RC_NOT_FOUND = 127
RC_TIMEOUT = 124


def _is_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def with_sudo(cmd: list[str]) -> list[str]:
    """Prefix ``sudo`` unless the process already runs as root."""
    if _is_root():
        return list(cmd)
    return ["sudo"] + list(cmd)


def run_command(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    timeout: int | None = None,
) -> dict[str, Any]:
    """Run a command and report how it went.

    Output is streamed to the terminal so package managers can prompt
    (sudo password, confirmations).

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Whether the command requires root.
        timeout: Seconds before giving up. None = wait forever.

    Returns:
        ``{"ok": bool, "returncode": int, "error": str | None, "elapsed_ms": int}``
    """
    if needs_sudo:
        cmd = with_sudo(cmd)

    logger.debug("Executing: %s", " ".join(cmd))
    start = time.monotonic()

    try:
        result = subprocess.run(cmd, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.error("Command timed out after %ss: %s", timeout, " ".join(cmd))
        return _failure(RC_TIMEOUT, f"Command timed out ({timeout}s)", start)
    except FileNotFoundError:
        logger.error("Command not found: %s", cmd[0])
        return _failure(RC_NOT_FOUND, f"Command not found: {cmd[0]}", start)
    except OSError as e:
        logger.error("Could not launch %s: %s", cmd[0], e)
        return _failure(RC_NOT_FOUND, f"Could not launch {cmd[0]}: {e}", start)

    elapsed_ms = int((time.monotonic() - start) * 1000)

    if result.returncode == 0:
        return {"ok": True, "returncode": 0, "error": None, "elapsed_ms": elapsed_ms}

    return {
        "ok": False,
        "returncode": result.returncode,
        "error": f"Command failed (exit {result.returncode})",
        "elapsed_ms": elapsed_ms,
    }


def _failure(returncode: int, error: str, start: float) -> dict[str, Any]:
    return {
        "ok": False,
        "returncode": returncode,
        "error": error,
        "elapsed_ms": int((time.monotonic() - start) * 1000),
    }
