"""Tests for environment settings."""

from pathlib import Path

import pytest

from mcp_linux_ssh.config import Config, FailMode, Settings
from mcp_linux_ssh.config.settings import default_audit_log_path


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove any MCP_LINUX_SSH_* variables from the environment."""
    import os

    for key in list(os.environ):
        if key.startswith("MCP_LINUX_SSH_"):
            monkeypatch.delenv(key)


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))

    settings = Settings.from_env()

    assert settings.transport == "stdio"
    assert settings.http_host == "127.0.0.1"
    assert settings.http_port == 8000
    assert settings.multiplex is False
    assert settings.log_level == "INFO"
    assert settings.audit_log == tmp_path / "mcp_linux_ssh" / "tool_calls.jsonl"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MCP_LINUX_SSH_TRANSPORT", "HTTP")
    monkeypatch.setenv("MCP_LINUX_SSH_HTTP_PORT", "9100")
    monkeypatch.setenv("MCP_LINUX_SSH_MULTIPLEX", "true")
    monkeypatch.setenv("MCP_LINUX_SSH_LOG_LEVEL", "debug")
    monkeypatch.setenv("MCP_LINUX_SSH_AUDIT_LOG", "/var/log/mcp/calls.jsonl")

    settings = Settings.from_env()

    assert settings.transport == "http"
    assert settings.http_port == 9100
    assert settings.multiplex is True
    assert settings.log_level == "DEBUG"
    assert settings.audit_log == Path("/var/log/mcp/calls.jsonl")


def test_invalid_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MCP_LINUX_SSH_TRANSPORT", "carrier-pigeon")
    monkeypatch.setenv("MCP_LINUX_SSH_HTTP_PORT", "eighty")

    settings = Settings.from_env()

    assert settings.transport == "stdio"
    assert settings.http_port == 8000


def test_audit_log_can_be_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MCP_LINUX_SSH_AUDIT_LOG", "None")

    assert Settings.from_env().audit_log is None


def test_default_audit_path_without_xdg(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("XDG_STATE_HOME", raising=False)

    path = default_audit_log_path()

    assert path == Path.home() / ".local" / "state" / "mcp_linux_ssh" / "tool_calls.jsonl"


class TestConfig:
    """Tests for the aggregate Config."""

    def test_delegates_to_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MCP_LINUX_SSH_MULTIPLEX", "1")

        config = Config.from_env()

        assert config.multiplex is True
        assert config.transport == "stdio"

    def test_invalid_judge_config_disables_judge(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MCP_LINUX_SSH_JUDGE_SERVICE", "openai")
        monkeypatch.setenv("MCP_LINUX_SSH_JUDGE_FAIL_MODE", "sideways")

        config = Config.from_env()

        assert config.judge.enabled is False
        assert config.judge.fail_mode is FailMode.OPEN
