"""Tests for ssh argument vectors and remote execution."""

import getpass
import os
from unittest.mock import AsyncMock, patch

import pytest

from mcp_linux_ssh.errors import SudoNotPermittedError
from mcp_linux_ssh.models import CommandSpec, ConnectionSpec, ExecutionResult
from mcp_linux_ssh.services.ssh import (
    build_patch_command,
    build_ssh_command,
    build_sudo_command,
    check_no_sudo,
    get_multiplexing_options,
    run_remote_command,
    run_remote_sudo_command,
)


@pytest.fixture
def connection() -> ConnectionSpec:
    """Connection to test.local with defaults for everything else."""
    return ConnectionSpec(remote_host="test.local")


@pytest.fixture
def key_path() -> str:
    """Expanded default private key path."""
    return os.path.expanduser("~/.ssh/id_ed25519")


class TestBuildSSHCommand:
    """Tests for the plain remote command shape."""

    def test_defaults(self, connection: ConnectionSpec, key_path: str) -> None:
        """Unset user falls back to the OS user and the default key."""
        argv = build_ssh_command(connection, CommandSpec("uptime"))

        assert argv == [
            "ssh",
            "test.local",
            "-l",
            getpass.getuser(),
            "-i",
            key_path,
            "uptime",
        ]

    def test_options_precede_remote_command(self) -> None:
        """-o options go before the command so ssh, not the remote side, reads them."""
        connection = ConnectionSpec(
            remote_host="db1",
            remote_user="admin",
            private_key="/keys/db",
            options=("ConnectTimeout=5", "Port=2222"),
        )

        argv = build_ssh_command(connection, CommandSpec("ls", ("-la", "/var/log")))

        assert argv == [
            "ssh", "db1", "-l", "admin", "-i", "/keys/db",
            "-o", "ConnectTimeout=5", "-o", "Port=2222",
            "ls", "-la", "/var/log",
        ]

    def test_multiplexing_options_come_first(self, connection: ConnectionSpec) -> None:
        """Multiplexing options are injected ahead of user options."""
        connection = ConnectionSpec(remote_host="test.local", options=("Port=22",))

        argv = build_ssh_command(connection, CommandSpec("uptime"), multiplex=True)

        options = [argv[i + 1] for i, arg in enumerate(argv) if arg == "-o"]
        assert options[:4] == get_multiplexing_options()
        assert options[-1] == "Port=22"
        assert argv[-1] == "uptime"


class TestMultiplexingOptions:
    """Tests for connection multiplexing options."""

    def test_contents(self) -> None:
        options = get_multiplexing_options()

        assert "ControlMaster=auto" in options
        assert "ControlPersist=10m" in options
        assert "StrictHostKeyChecking=yes" in options

    def test_control_path_is_expanded(self) -> None:
        """The control socket path never contains a literal ~."""
        control_path = next(
            o for o in get_multiplexing_options() if o.startswith("ControlPath=")
        )

        assert "~" not in control_path
        assert control_path.endswith("control-%h-%p-%r")


class TestSudoAndPatch:
    """Tests for the sudo and patch shapes."""

    def test_sudo_prefixes_command(self, connection: ConnectionSpec) -> None:
        argv = build_sudo_command(connection, CommandSpec("systemctl", ("restart", "nginx")))

        assert argv[-4:] == ["sudo", "systemctl", "restart", "nginx"]

    def test_patch_shape(self, connection: ConnectionSpec) -> None:
        argv = build_patch_command(connection, "/etc/motd")

        assert argv[-2:] == ["patch", "/etc/motd"]
        assert argv[:2] == ["ssh", "test.local"]


class TestSudoRule:
    """Tests for the non-privileged sudo rejection."""

    @pytest.mark.parametrize(
        "command",
        [
            CommandSpec("sudo", ("ls",)),
            CommandSpec("ls", ("sudo",)),
            CommandSpec("sh", ("-c", "echo hi && sudo reboot")),
            CommandSpec("/usr/bin/sudoedit", ()),
        ],
    )
    def test_rejects_any_mention(self, command: CommandSpec) -> None:
        with pytest.raises(SudoNotPermittedError):
            check_no_sudo(command)

    def test_allows_plain_commands(self) -> None:
        check_no_sudo(CommandSpec("uptime"))

    @pytest.mark.asyncio
    async def test_rejected_before_spawning(self, connection: ConnectionSpec) -> None:
        """No process is started for a rejected command."""
        with patch(
            "mcp_linux_ssh.services.ssh.run_process", new_callable=AsyncMock
        ) as mock_run:
            with pytest.raises(SudoNotPermittedError) as exc_info:
                await run_remote_command(connection, CommandSpec("sudo", ("id",)))

        mock_run.assert_not_called()
        assert str(exc_info.value) == "You may not run commands with sudo using this tool"


@pytest.mark.asyncio
async def test_run_remote_command_uses_connection_timeout() -> None:
    """The connection timeout bounds the ssh process."""
    connection = ConnectionSpec(remote_host="web1", remote_user="ops", timeout=7)
    expected = ExecutionResult(exit_code=0, stdout="up 3 days")

    with patch(
        "mcp_linux_ssh.services.ssh.run_process",
        new_callable=AsyncMock,
        return_value=expected,
    ) as mock_run:
        result = await run_remote_command(connection, CommandSpec("uptime"))

    assert result is expected
    args, kwargs = mock_run.call_args
    assert args[0] == "ssh"
    assert list(args[1])[-1] == "uptime"
    assert kwargs["timeout"] == 7
    assert kwargs["label"] == "SSH command"


@pytest.mark.asyncio
async def test_run_remote_sudo_command_allows_sudo() -> None:
    """The privileged path has no sudo restriction."""
    connection = ConnectionSpec(remote_host="web1", remote_user="ops")

    with patch(
        "mcp_linux_ssh.services.ssh.run_process",
        new_callable=AsyncMock,
        return_value=ExecutionResult(exit_code=0),
    ) as mock_run:
        await run_remote_sudo_command(connection, CommandSpec("sudo", ("-l",)))

    args, kwargs = mock_run.call_args
    assert list(args[1])[-3:] == ["sudo", "sudo", "-l"]
    assert kwargs["label"] == "SSH sudo command"
