"""
Settings model — the configuration object built once at startup.

Produced by ``mysys.core.config.loader.load_settings`` from the
three-tier variables cascade and passed explicitly to every use case.
Nothing downstream reads ``os.environ`` directly.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

TIER_VARIABLES = "variables"
TIER_LOCAL_VARIABLES = "local_variables"
TIER_SECRETS = "secrets"
TIER_ENVIRONMENT = "environment"

# Cascade order: later tiers override earlier ones
TIERS: tuple[str, ...] = (TIER_VARIABLES, TIER_LOCAL_VARIABLES, TIER_SECRETS)


class Settings(BaseModel):
    """Resolved, immutable configuration for one run."""

    model_config = ConfigDict(frozen=True)

    home: Path
    tier_files: dict[str, Path] = Field(default_factory=dict)

    # Merged KEY → value and KEY → tier it came from
    variables: dict[str, str] = Field(default_factory=dict)
    sources: dict[str, str] = Field(default_factory=dict)

    specs_file: Path | None = None
    install_timeout: int | None = None      # seconds; None = wait forever
    refresh_index: bool = True
    ssh_key_comment: str = ""
    ssh_dir: Path = Field(default_factory=lambda: Path.home() / ".ssh")

    def is_secret(self, key: str) -> bool:
        return self.sources.get(key) == TIER_SECRETS
