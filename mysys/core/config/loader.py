"""
Configuration loader — reads the variables cascade into a Settings object.

The mysys home folder holds three env-style files, sourced in order:

    .variables        → shared defaults, committed with the toolkit
    .local_variables  → machine-specific overrides
    .secrets          → credentials, never shown unredacted

Later files override earlier ones.  Missing files are created empty.
The files are parsed, never executed; `$VAR` references are expanded
against the environment and earlier assignments.
"""

from __future__ import annotations

import io
import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path

from dotenv.parser import parse_stream

from mysys.core.models.settings import (
    TIER_ENVIRONMENT,
    TIER_LOCAL_VARIABLES,
    TIER_SECRETS,
    TIER_VARIABLES,
    TIERS,
    Settings,
)

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "MYSYS_HOME"
DEFAULT_HOME = Path.home() / ".mysys"

# Tier file names; each can be renamed through the matching env var
_TIER_FILE_DEFAULTS: dict[str, tuple[str, str]] = {
    TIER_VARIABLES: ("FILE_VARIABLES", ".variables"),
    TIER_LOCAL_VARIABLES: ("FILE_LOCAL_VARIABLES", ".local_variables"),
    TIER_SECRETS: ("FILE_SECRETS", ".secrets"),
}

SPECS_FILE_NAME = "packages.yml"

# Typed options read from the cascade (falling back to the environment)
OPT_SPECS_FILE = "MYSYS_SPECS_FILE"
OPT_INSTALL_TIMEOUT = "MYSYS_INSTALL_TIMEOUT"
OPT_REFRESH_INDEX = "MYSYS_REFRESH_INDEX"
OPT_SSH_KEY_COMMENT = "MYSYS_SSH_KEY_COMMENT"
OPT_SSH_DIR = "MYSYS_SSH_DIR"

OPTION_KEYS: tuple[str, ...] = (
    OPT_SPECS_FILE,
    OPT_INSTALL_TIMEOUT,
    OPT_REFRESH_INDEX,
    OPT_SSH_KEY_COMMENT,
    OPT_SSH_DIR,
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

# $VAR, ${VAR} and ${VAR:-default}
_VAR_REF = re.compile(
    r"\$(?:\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}"
    r"|(?P<bare>[A-Za-z_][A-Za-z0-9_]*))"
)


class ConfigError(Exception):
    """Raised when configuration is invalid or unreadable."""


def resolve_home(home: Path | str | None = None, environ: Mapping[str, str] | None = None) -> Path:
    """Pick the mysys home folder: explicit arg > MYSYS_HOME > ~/.mysys."""
    env = os.environ if environ is None else environ
    if home:
        return Path(home).expanduser()
    if env.get(HOME_ENV_VAR):
        return Path(env[HOME_ENV_VAR]).expanduser()
    return DEFAULT_HOME


def tier_files(home: Path, environ: Mapping[str, str] | None = None) -> dict[str, Path]:
    """Map each tier to its file inside ``home``."""
    env = os.environ if environ is None else environ
    return {
        tier: home / env.get(env_var, default)
        for tier, (env_var, default) in _TIER_FILE_DEFAULTS.items()
    }


def expand_value(value: str, context: Mapping[str, str]) -> str:
    """Expand ``$VAR``, ``${VAR}`` and ``${VAR:-default}`` from ``context``.

    Unset variables expand to the empty string, as in the shell.
    """
    def _sub(match: re.Match[str]) -> str:
        name = match.group("braced") or match.group("bare")
        default = match.group("default")
        found = context.get(name, "")
        if not found and default is not None:
            return default
        return found

    return _VAR_REF.sub(_sub, value)


def parse_env_file(path: Path, context: Mapping[str, str] | None = None) -> dict[str, str]:
    """Parse an env-style file the way sourcing it would.

    Syntax (quotes, ``export``, full-line and trailing comments) is
    handled by python-dotenv.  Variable references are expanded against
    ``context`` plus the assignments above them in the same file,
    except inside single quotes.  Lines that assign nothing (``KEY``
    alone) and unparsable lines are skipped with a warning.

    Raises:
        ConfigError: If the file exists but cannot be read.
    """
    if not path.is_file():
        return {}

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    scope = dict(context or {})
    result: dict[str, str] = {}
    for binding in parse_stream(io.StringIO(content)):
        if binding.error:
            logger.warning(
                "Ignoring unparsable line %d in %s", binding.original.line, path.name,
            )
            continue
        if binding.key is None:
            continue
        if binding.value is None:
            logger.warning("Ignoring %s in %s: no value assigned", binding.key, path.name)
            continue

        literal = binding.original.string.partition("=")[2].lstrip().startswith("'")
        value = binding.value if literal else expand_value(binding.value, scope)
        result[binding.key] = value
        scope[binding.key] = value

    return result


def _ensure_file(path: Path) -> None:
    """Create an empty tier file when it does not exist yet."""
    if path.is_file():
        return
    logger.warning("we DON'T have a %s file - creating it", path.name)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
    except OSError as e:
        raise ConfigError(f"Cannot create {path}: {e}") from e


def load_variables(
    files: dict[str, Path],
    create_missing: bool = True,
    environ: Mapping[str, str] | None = None,
) -> tuple[dict[str, str], dict[str, str]]:
    """Run the cascade over the tier files.

    A tier can reference the environment and anything set by an
    earlier tier, e.g. ``MYSYS_SPECS_FILE=$HOME/packages.yml``.

    Returns:
        (variables, sources): merged KEY → value, and KEY → winning tier.
    """
    env = os.environ if environ is None else environ
    variables: dict[str, str] = {}
    sources: dict[str, str] = {}

    for tier in TIERS:
        path = files[tier]
        if create_missing:
            _ensure_file(path)
        values = parse_env_file(path, context={**env, **variables})
        logger.debug("Loaded %d variables from %s", len(values), path)
        for key, value in values.items():
            variables[key] = value
            sources[key] = tier

    return variables, sources


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean (true/false), got {raw!r}")


def _parse_timeout(key: str, raw: str) -> int | None:
    try:
        seconds = int(raw.strip() or "0")
    except ValueError as e:
        raise ConfigError(f"{key} must be a whole number of seconds, got {raw!r}") from e
    if seconds < 0:
        raise ConfigError(f"{key} cannot be negative, got {seconds}")
    return seconds or None


def load_settings(
    home: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
    create_missing: bool = True,
) -> Settings:
    """Build the Settings object for this run.

    Args:
        home: Explicit mysys home folder (default: MYSYS_HOME or ~/.mysys).
        environ: Environment to read fallbacks from (default: os.environ).
        create_missing: Create empty tier files that do not exist.

    Returns:
        Frozen Settings.

    Raises:
        ConfigError: If a file cannot be read or an option is invalid.
    """
    env = os.environ if environ is None else environ
    home_dir = resolve_home(home, env)
    files = tier_files(home_dir, env)

    variables, sources = load_variables(files, create_missing=create_missing, environ=env)

    # Typed options not set by any tier may come from the environment
    for key in OPTION_KEYS:
        if key not in variables and key in env:
            variables[key] = env[key]
            sources[key] = TIER_ENVIRONMENT

    specs_file: Path | None = None
    if variables.get(OPT_SPECS_FILE):
        specs_file = Path(variables[OPT_SPECS_FILE]).expanduser()
        if not specs_file.is_absolute():
            specs_file = home_dir / specs_file
    elif (home_dir / SPECS_FILE_NAME).is_file():
        specs_file = home_dir / SPECS_FILE_NAME

    options: dict = {
        "install_timeout": _parse_timeout(
            OPT_INSTALL_TIMEOUT, variables.get(OPT_INSTALL_TIMEOUT, "0"),
        ),
        "refresh_index": _parse_bool(
            OPT_REFRESH_INDEX, variables.get(OPT_REFRESH_INDEX) or "true",
        ),
        "ssh_key_comment": variables.get(OPT_SSH_KEY_COMMENT, ""),
    }
    if variables.get(OPT_SSH_DIR):
        options["ssh_dir"] = Path(variables[OPT_SSH_DIR]).expanduser()

    settings = Settings(
        home=home_dir,
        tier_files=files,
        variables=variables,
        sources=sources,
        specs_file=specs_file,
        **options,
    )
    logger.info(
        "Loaded settings from %s (%d variables)", home_dir, len(variables),
    )
    return settings
