"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from mysys.adapters.mock import MockPackageManager
from mysys.adapters.registry import ManagerRegistry

_ENV_VARS = (
    "MYSYS_HOME",
    "MYSYS_SPECS_FILE",
    "MYSYS_INSTALL_TIMEOUT",
    "MYSYS_REFRESH_INDEX",
    "MYSYS_SSH_KEY_COMMENT",
    "MYSYS_SSH_DIR",
    "MYSYS_LOG_LEVEL",
    "MYSYS_LOG_FILE",
    "MYSYS_LOG_FILE_LEVEL",
    "FILE_VARIABLES",
    "FILE_LOCAL_VARIABLES",
    "FILE_SECRETS",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep the developer's own mysys environment out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """An empty mysys home folder."""
    path = tmp_path / "mysys-home"
    path.mkdir()
    return path


class FakeSystem:
    """A PATH that knows which commands are installed.

    ``probe`` answers from the set; the mock manager's successful installs
    add the package id to it, so installed packages start resolving.
    """

    def __init__(self, present: set[str] | None = None):
        self.present: set[str] = set(present or ())
        self.probed: list[str] = []

    def probe(self, command: str) -> bool:
        self.probed.append(command)
        return command in self.present

    def mark_installed(self, package_id: str) -> None:
        self.present.add(package_id)


@pytest.fixture
def fake_system() -> FakeSystem:
    return FakeSystem()


@pytest.fixture
def mock_manager(fake_system: FakeSystem) -> MockPackageManager:
    return MockPackageManager(manager_name="apt", on_install=fake_system.mark_installed)


@pytest.fixture
def registry(mock_manager: MockPackageManager) -> ManagerRegistry:
    """Registry with mocks standing in for apt, brew and snap."""
    reg = ManagerRegistry()
    reg.register(mock_manager)
    reg.register(MockPackageManager(manager_name="brew"))
    reg.register(MockPackageManager(manager_name="snap"))
    return reg
