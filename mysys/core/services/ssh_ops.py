"""
SSH operations — make sure the machine has a default SSH key.

Channel-independent: the CLI renders the returned dict.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Mapping

from mysys.adapters.runner import run_command
from mysys.core.models.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_KEY_NAME = "id_rsa"


def keygen_command(key_path: str, comment: str = "") -> list[str]:
    """``ssh-keygen`` invocation for a 4096-bit RSA key."""
    cmd = ["ssh-keygen", "-t", "rsa", "-b", "4096"]
    if comment:
        cmd += ["-C", comment]
    cmd += ["-f", key_path]
    return cmd


def ensure_ssh_key(
    settings: Settings,
    key_name: str = DEFAULT_KEY_NAME,
    environ: Mapping[str, str] | None = None,
) -> dict:
    """Create the default SSH key if it does not exist yet.

    The key is added to the running agent when one is reachable
    (``SSH_AUTH_SOCK`` set).

    Returns:
        {"ok": bool, "created": bool, "key": str, "added_to_agent": bool,
         "error": str | None}
    """
    env = os.environ if environ is None else environ
    key_path = settings.ssh_dir / key_name
    result: dict = {
        "ok": True,
        "created": False,
        "key": str(key_path),
        "added_to_agent": False,
        "error": None,
    }

    if key_path.is_file():
        logger.info("ssh key %s already exists", key_path)
        return result

    if not shutil.which("ssh-keygen"):
        result["ok"] = False
        result["error"] = "ssh-keygen not installed"
        return result

    settings.ssh_dir.mkdir(mode=0o700, parents=True, exist_ok=True)

    logger.info("creating new ssh key: %s", key_name)
    keygen = run_command(keygen_command(str(key_path), settings.ssh_key_comment))
    if not keygen["ok"]:
        result["ok"] = False
        result["error"] = f"ssh-keygen failed: {keygen['error']}"
        return result
    result["created"] = True

    if env.get("SSH_AUTH_SOCK") and shutil.which("ssh-add"):
        added = run_command(["ssh-add", str(key_path)])
        if not added["ok"]:
            result["ok"] = False
            result["error"] = f"ssh-add failed: {added['error']}"
            return result
        result["added_to_agent"] = True
    else:
        logger.warning("no ssh agent running; add the key later with: ssh-add %s", key_path)

    return result
