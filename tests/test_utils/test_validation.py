"""Tests for parameter validation helpers."""

import pytest

from mcp_linux_ssh.errors import DecodeError
from mcp_linux_ssh.utils.shell import join_command, quote_arg
from mcp_linux_ssh.utils.validation import (
    expand_path,
    optional_str,
    require_str,
    str_list,
    timeout_seconds,
    validate_host,
    validate_ssh_option,
)


class TestStrings:
    """Tests for string parameter helpers."""

    def test_require_str(self) -> None:
        assert require_str({"cmd": "ls"}, "cmd") == "ls"

    def test_require_str_rejects_null_byte(self) -> None:
        with pytest.raises(DecodeError, match="null byte"):
            require_str({"cmd": "ls\x00rm"}, "cmd")

    def test_require_str_rejects_non_string(self) -> None:
        with pytest.raises(DecodeError, match="must be a string, got int"):
            require_str({"cmd": 5}, "cmd")

    def test_optional_str(self) -> None:
        assert optional_str({}, "remote_user") is None
        assert optional_str({"remote_user": None}, "remote_user") is None
        assert optional_str({"remote_user": "root"}, "remote_user") == "root"

    def test_str_list(self) -> None:
        assert str_list({"args": ["-l", "/"]}, "args") == ("-l", "/")
        assert str_list({}, "args") == ()

    def test_str_list_none_is_empty(self) -> None:
        assert str_list({"args": None}, "args") == ()

    def test_str_list_rejects_non_list(self) -> None:
        with pytest.raises(DecodeError, match="must be a list of strings"):
            str_list({"args": "-l /"}, "args")


class TestTimeout:
    """Tests for timeout_seconds."""

    def test_default(self) -> None:
        assert timeout_seconds({}, 30) == 30

    def test_zero_allowed(self) -> None:
        assert timeout_seconds({"timeout_seconds": 0}, 30) == 0

    @pytest.mark.parametrize("value", [-1, 1.5, "10", False])
    def test_invalid(self, value: object) -> None:
        with pytest.raises(DecodeError):
            timeout_seconds({"timeout_seconds": value}, 30)


class TestHostAndOptions:
    """Tests for host and ssh option validation."""

    @pytest.mark.parametrize("host", ["web1", "db.example.com", "10.0.0.5", "[::1]", "fe80::1"])
    def test_valid_hosts(self, host: str) -> None:
        assert validate_host(host) == host

    @pytest.mark.parametrize("host", ["", "-oProxyCommand=x", "a b", "a|b", "$(id)", "a" * 254])
    def test_invalid_hosts(self, host: str) -> None:
        with pytest.raises(DecodeError):
            validate_host(host)

    def test_ssh_option(self) -> None:
        assert validate_ssh_option("ConnectTimeout=5") == "ConnectTimeout=5"

    @pytest.mark.parametrize("option", ["ConnectTimeout", "=5", ""])
    def test_invalid_ssh_option(self, option: str) -> None:
        with pytest.raises(DecodeError):
            validate_ssh_option(option)


class TestExpandPath:
    """Tests for local path expansion."""

    def test_expands_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/tester")

        assert expand_path("~/report.txt", "source") == "/home/tester/report.txt"

    def test_absolute_unchanged(self) -> None:
        assert expand_path("/etc/hosts", "source") == "/etc/hosts"

    def test_unknown_user(self) -> None:
        with pytest.raises(DecodeError, match="Failed to expand source path"):
            expand_path("~no-such-user-7c1e/file", "source")


class TestShell:
    """Tests for shell quoting helpers."""

    def test_quote_arg(self) -> None:
        assert quote_arg("plain") == "plain"
        assert quote_arg("two words") == "'two words'"

    def test_join_command(self) -> None:
        assert join_command(["ssh", "-i", "/k/my key"]) == "ssh -i '/k/my key'"
