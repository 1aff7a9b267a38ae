"""
Error taxonomy for the installer.

Two families, both fatal:

    PreconditionError     → checked before any probe or install runs
    ExternalCommandError  → a package manager call returned non-zero

Use cases catch ``MysysError`` and surface it as ``result.error``;
the CLI prints it and exits 1.  Nothing here is retried.
"""

from __future__ import annotations


class MysysError(Exception):
    """Base class for every installer error."""


class PreconditionError(MysysError):
    """The run cannot start (wrong platform, missing spec or capability)."""


class UnsupportedPlatformError(PreconditionError):
    """The detected OS family has no installer support."""

    def __init__(self, system: str = ""):
        self.system = system
        detail = f" ({system})" if system else ""
        super().__init__(f"as of now not supporting this OS{detail}")


class ProbeCapabilityMissingError(PreconditionError):
    """A required spec, probe or package manager was not supplied."""

    def __init__(self, capability: str, detail: str = ""):
        self.capability = capability
        message = f"must provide {capability}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ExternalCommandError(MysysError):
    """An external command failed or could not be launched."""


class InstallFailedError(ExternalCommandError):
    """Installing a package returned a non-zero exit status."""

    def __init__(self, package_id: str, exit_code: int):
        self.package_id = package_id
        self.exit_code = exit_code
        super().__init__(f"could not install: {package_id} (exit {exit_code})")
