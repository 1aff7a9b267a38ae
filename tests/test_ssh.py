"""
Tests for default SSH key creation.
"""

from pathlib import Path

import pytest

from mysys.core.models.settings import Settings
from mysys.core.services import ssh_ops
from mysys.core.services.ssh_ops import ensure_ssh_key, keygen_command


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(home=tmp_path, ssh_dir=tmp_path / "ssh", ssh_key_comment="me@laptop")


@pytest.fixture
def commands(monkeypatch) -> list[list[str]]:
    """Record run_command calls; ssh-keygen writes the key file."""
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        if cmd[0] == "ssh-keygen":
            Path(cmd[-1]).write_text("PRIVATE KEY")
        return {"ok": True, "returncode": 0, "error": None}

    monkeypatch.setattr(ssh_ops, "run_command", fake_run)
    monkeypatch.setattr(ssh_ops.shutil, "which", lambda name: f"/usr/bin/{name}")
    return calls


class TestKeygenCommand:
    def test_with_comment(self):
        assert keygen_command("/k/id_rsa", "me@laptop") == [
            "ssh-keygen", "-t", "rsa", "-b", "4096", "-C", "me@laptop", "-f", "/k/id_rsa",
        ]

    def test_without_comment(self):
        assert keygen_command("/k/id_rsa") == [
            "ssh-keygen", "-t", "rsa", "-b", "4096", "-f", "/k/id_rsa",
        ]


class TestEnsureSshKey:
    def test_existing_key_untouched(self, settings, commands):
        settings.ssh_dir.mkdir()
        (settings.ssh_dir / "id_rsa").write_text("OLD")

        result = ensure_ssh_key(settings, environ={})

        assert result["ok"]
        assert not result["created"]
        assert commands == []

    def test_creates_key_and_adds_to_agent(self, settings, commands):
        result = ensure_ssh_key(settings, environ={"SSH_AUTH_SOCK": "/tmp/agent.sock"})

        key = str(settings.ssh_dir / "id_rsa")
        assert result == {
            "ok": True, "created": True, "key": key, "added_to_agent": True, "error": None,
        }
        assert commands == [keygen_command(key, "me@laptop"), ["ssh-add", key]]
        assert settings.ssh_dir.is_dir()

    def test_no_agent(self, settings, commands):
        result = ensure_ssh_key(settings, environ={})
        assert result["created"]
        assert not result["added_to_agent"]
        assert [c[0] for c in commands] == ["ssh-keygen"]

    def test_second_run_is_noop(self, settings, commands):
        ensure_ssh_key(settings, environ={})
        commands.clear()
        result = ensure_ssh_key(settings, environ={})
        assert not result["created"]
        assert commands == []

    def test_keygen_missing(self, settings, monkeypatch):
        monkeypatch.setattr(ssh_ops.shutil, "which", lambda name: None)
        result = ensure_ssh_key(settings, environ={})
        assert not result["ok"]
        assert result["error"] == "ssh-keygen not installed"

    def test_keygen_failure(self, settings, monkeypatch):
        monkeypatch.setattr(ssh_ops.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(
            ssh_ops, "run_command",
            lambda cmd, **kw: {"ok": False, "returncode": 1, "error": "Command failed (exit 1)"},
        )
        result = ensure_ssh_key(settings, environ={})
        assert not result["ok"]
        assert not result["created"]
        assert "ssh-keygen failed" in result["error"]
