"""
Tests for the install, status and config use cases.

Each use case runs against a temporary mysys home with an explicit
OS family, so nothing depends on the host machine.
"""

from pathlib import Path

from mysys.core.models import OsFamily
from mysys.core.use_cases.config_check import check_config, redact_value, show_config
from mysys.core.use_cases.install import GROUP_BASICS, GROUP_TOOLS, install_group
from mysys.core.use_cases.status import package_status

_CATALOG = """\
specs:
  - name: common
    packages:
      curl: curl
      git: git
  - name: linux
    os: linux
    packages:
      mesa-utils: glxinfo
  - name: macos
    os: macos
"""


def _home_with_catalog(home: Path, catalog: str = _CATALOG) -> Path:
    (home / "packages.yml").write_text(catalog)
    return home


# ── Install ─────────────────────────────────────────────────────────


class TestInstallGroup:
    def test_installs_missing(self, home, fake_system, registry, mock_manager):
        _home_with_catalog(home)
        fake_system.present = {"curl"}

        result = install_group(
            GROUP_BASICS, home=home, os_family=OsFamily.LINUX,
            registry=registry, probe=fake_system.probe,
        )

        assert result.ok
        assert result.exit_code == 0
        assert result.specs == ["common", "linux"]
        assert mock_manager.call_log == ["git", "mesa-utils"]

    def test_second_run_installs_nothing(self, home, fake_system, registry, mock_manager):
        _home_with_catalog(home)
        fake_system.present = {"glxinfo"}
        install_group(GROUP_BASICS, home=home, os_family=OsFamily.LINUX,
                      registry=registry, probe=fake_system.probe)
        mock_manager.reset()

        result = install_group(GROUP_BASICS, home=home, os_family=OsFamily.LINUX,
                               registry=registry, probe=fake_system.probe)

        assert result.ok
        assert mock_manager.call_count == 0
        assert result.report.already_present == ["curl", "git", "mesa-utils"]

    def test_failure_sets_error(self, home, fake_system, registry, mock_manager):
        _home_with_catalog(home)
        mock_manager.set_failure("git", exit_code=100)

        result = install_group(GROUP_BASICS, home=home, os_family=OsFamily.LINUX,
                               registry=registry, probe=fake_system.probe)

        assert not result.ok
        assert result.exit_code == 1
        assert result.error == "could not install: git (exit 100)"
        assert mock_manager.call_log == ["curl", "git"]

    def test_unsupported_os(self, home, fake_system, registry, mock_manager):
        result = install_group(GROUP_BASICS, home=home, os_family=OsFamily.UNSUPPORTED,
                               registry=registry, probe=fake_system.probe)

        assert result.exit_code == 1
        assert "not supporting this OS" in result.error
        assert result.report is None
        assert fake_system.probed == []
        assert mock_manager.call_count == 0

    def test_group_without_os_spec(self, home, fake_system, registry):
        _home_with_catalog(home, "specs:\n  - name: common\n    packages: {curl: curl}\n")

        result = install_group(GROUP_BASICS, home=home, os_family=OsFamily.LINUX,
                               registry=registry, probe=fake_system.probe)

        assert "must provide a 'linux' spec" in result.error
        assert fake_system.probed == []

    def test_bad_catalog_is_error(self, home):
        _home_with_catalog(home, "specs: [\n")
        result = install_group(GROUP_BASICS, home=home, os_family=OsFamily.LINUX)
        assert "Invalid YAML" in result.error
        assert result.os_family is None

    def test_mock_mode_uses_builtin_catalog(self, home, fake_system):
        result = install_group(GROUP_TOOLS, home=home, mock_mode=True,
                               os_family=OsFamily.LINUX, probe=fake_system.probe)

        assert result.ok
        assert result.mock
        assert result.report.installed == ["freecad", "surfshark", "foliate"]

    def test_empty_macos_tools(self, home, fake_system):
        result = install_group(GROUP_TOOLS, home=home, mock_mode=True,
                               os_family=OsFamily.MACOS, probe=fake_system.probe)
        assert result.ok
        assert result.report.outcomes == []

    def test_to_dict(self, home, fake_system, registry):
        _home_with_catalog(home)
        data = install_group(GROUP_BASICS, home=home, os_family=OsFamily.MACOS,
                             registry=registry, probe=fake_system.probe).to_dict()

        assert data["group"] == "basics"
        assert data["os"] == "macos"
        assert data["ok"] is True
        assert data["specs"] == ["common", "macos"]
        assert data["report"]["installed"] == ["curl", "git"]

    def test_to_dict_error(self, home):
        data = install_group(GROUP_BASICS, home=home, os_family=OsFamily.UNSUPPORTED).to_dict()
        assert data["ok"] is False
        assert "report" not in data
        assert data["os"] == "unsupported"


# ── Status ──────────────────────────────────────────────────────────


class TestPackageStatus:
    def test_probe_only(self, home, fake_system):
        _home_with_catalog(home)
        fake_system.present = {"git"}

        result = package_status(GROUP_BASICS, home=home, os_family=OsFamily.LINUX,
                                probe=fake_system.probe)

        assert result.error is None
        assert result.present == ["git"]
        assert result.missing == ["curl", "mesa-utils"]
        assert fake_system.probed == ["curl", "git", "glxinfo"]

    def test_unknown_group(self, home, fake_system):
        result = package_status("desktop", home=home, os_family=OsFamily.LINUX,
                                probe=fake_system.probe)
        assert "group 'desktop'" in result.error
        assert result.to_dict() == {"group": "desktop", "error": result.error}


# ── Config ──────────────────────────────────────────────────────────


class TestRedactValue:
    def test_forms(self):
        assert redact_value("") == "(empty)"
        assert redact_value("abc") == "****"
        assert redact_value("hunter22") == "hu****22"


class TestShowConfig:
    def test_redacts_secrets(self, home):
        (home / ".variables").write_text("USER=me\n")
        (home / ".secrets").write_text("TOKEN=hunter22\n")

        data = show_config(home).to_dict()

        values = {v["key"]: v for v in data["variables"]}
        assert values["USER"] == {"key": "USER", "value": "me", "tier": "variables"}
        assert values["TOKEN"]["value"] == "hu****22"
        assert values["TOKEN"]["tier"] == "secrets"

    def test_reveal(self, home):
        (home / ".secrets").write_text("TOKEN=hunter22\n")
        data = show_config(home).to_dict(redact=False)
        assert data["variables"] == [{"key": "TOKEN", "value": "hunter22", "tier": "secrets"}]

    def test_error(self, home):
        (home / ".variables").write_text("MYSYS_REFRESH_INDEX=maybe\n")
        result = show_config(home)
        assert "MYSYS_REFRESH_INDEX" in result.error
        assert result.to_dict() == {"error": result.error}


class TestCheckConfig:
    def test_builtin_catalog_valid(self, home, monkeypatch):
        monkeypatch.setattr("mysys.adapters.base.shutil.which", lambda name: f"/usr/bin/{name}")
        result = check_config(home, os_family=OsFamily.LINUX)
        assert result.valid
        assert result.errors == []
        assert result.warnings == ["Spec 'macos' is empty", "Spec 'macos-tools' is empty"]

    def test_missing_os_spec(self, home):
        _home_with_catalog(
            home,
            _CATALOG + "  - name: snaps\n    os: linux\n    group: tools\n    manager: snap\n",
        )
        result = check_config(home, os_family=OsFamily.MACOS)
        assert not result.valid
        assert "Group 'tools' declares no 'macos' spec" in result.errors

    def test_unknown_manager(self, home):
        _home_with_catalog(
            home,
            _CATALOG + "  - name: flats\n    os: linux\n    manager: flatpak\n"
            "    packages: {gimp: gimp}\n",
        )
        result = check_config(home, os_family=OsFamily.LINUX)
        assert not result.valid
        assert "Spec 'flats' uses unknown package manager 'flatpak'" in result.errors

    def test_repositories_need_capable_manager(self, home):
        _home_with_catalog(
            home,
            _CATALOG + "  - name: snaps\n    os: linux\n    manager: snap\n"
            "    repositories: [ppa:a/b]\n    packages: {gimp: gimp}\n",
        )
        result = check_config(home, os_family=OsFamily.LINUX)
        assert not result.valid
        assert "Spec 'snaps' lists repositories but 'snap' cannot add them" in result.errors

    def test_manager_not_on_path(self, home, monkeypatch):
        monkeypatch.setattr("mysys.adapters.base.shutil.which", lambda name: None)
        _home_with_catalog(home)
        result = check_config(home, os_family=OsFamily.LINUX)
        assert result.valid
        assert "Package manager 'apt' (apt-get) not on PATH" in result.warnings

    def test_unsupported_os(self, home):
        result = check_config(home, os_family=OsFamily.UNSUPPORTED)
        assert not result.valid
        assert result.to_dict()["os"] == "unsupported"

    def test_config_error(self, home):
        _home_with_catalog(home, "specs: [\n")
        result = check_config(home, os_family=OsFamily.LINUX)
        assert not result.valid
        assert result.catalog is None
        assert result.to_dict()["spec_count"] == 0
