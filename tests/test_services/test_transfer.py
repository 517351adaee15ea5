"""Tests for rsync copy and remote patch."""

import getpass
import os
import shlex
from unittest.mock import AsyncMock, patch

import pytest

from mcp_linux_ssh.models import ConnectionSpec, ExecutionResult
from mcp_linux_ssh.services.transfer import (
    build_copy_command,
    build_rsync_transport,
    copy_file,
    patch_file,
)

DIFF = """--- a/motd
+++ b/motd
@@ -1 +1 @@
-Welcome
+Welcome to web1
"""


@pytest.fixture
def connection() -> ConnectionSpec:
    """Connection to test.local with the OS user."""
    return ConnectionSpec(remote_host="test.local")


class TestCopyCommand:
    """Tests for the rsync argv."""

    def test_target_includes_user(self, connection: ConnectionSpec) -> None:
        argv = build_copy_command("~/report.txt", "/tmp/report.txt", connection)

        assert argv[:3] == ["rsync", "-avb", "-e"]
        assert argv[4] == os.path.expanduser("~/report.txt")
        assert argv[5] == f"{getpass.getuser()}@test.local:/tmp/report.txt"

    def test_target_under_multiplexing(self, connection: ConnectionSpec) -> None:
        """Under multiplexing the user travels in the transport instead."""
        argv = build_copy_command(
            "~/report.txt", "/tmp/report.txt", connection, multiplex=True
        )

        assert argv[5] == "test.local:/tmp/report.txt"
        assert f"-l {getpass.getuser()}" in argv[3]

    @pytest.mark.parametrize("multiplex", [False, True])
    def test_transport_checks_host_keys(
        self, connection: ConnectionSpec, multiplex: bool
    ) -> None:
        transport = build_rsync_transport(connection, multiplex)

        assert transport.startswith("ssh -i ")
        assert "-o StrictHostKeyChecking=yes" in transport

    @pytest.mark.parametrize("relaxed", ["no", "accept-new"])
    @pytest.mark.parametrize("multiplex", [False, True])
    def test_user_option_cannot_relax_host_key_checking(
        self, multiplex: bool, relaxed: str
    ) -> None:
        """ssh keeps the first value of an option, so yes must come first."""
        connection = ConnectionSpec(
            remote_host="test.local",
            remote_user="u",
            options=(f"StrictHostKeyChecking={relaxed}",),
        )

        argv = shlex.split(build_rsync_transport(connection, multiplex))

        values = [
            argv[i + 1].partition("=")[2]
            for i, flag in enumerate(argv)
            if flag == "-o" and argv[i + 1].startswith("StrictHostKeyChecking=")
        ]
        assert values[0] == "yes"
        assert values[-1] == relaxed

    def test_multiplexing_options_precede_user_options(self) -> None:
        connection = ConnectionSpec(
            remote_host="h", remote_user="u", options=("ControlMaster=no",)
        )

        argv = shlex.split(build_rsync_transport(connection, multiplex=True))

        assert argv.index("ControlMaster=auto") < argv.index("ControlMaster=no")

    def test_transport_carries_user_options(self) -> None:
        connection = ConnectionSpec(
            remote_host="h", remote_user="u", options=("Port=2222",)
        )

        transport = build_rsync_transport(connection)

        assert "-o Port=2222" in transport
        assert "ControlMaster" not in transport

    def test_transport_quotes_key_path(self) -> None:
        """A key path with spaces survives rsync's remote-shell splitting."""
        connection = ConnectionSpec(
            remote_host="h", remote_user="u", private_key="/keys/my key"
        )

        transport = build_rsync_transport(connection)

        assert "'/keys/my key'" in transport


@pytest.mark.asyncio
async def test_copy_file_runs_rsync(connection: ConnectionSpec) -> None:
    """copy_file hands the rsync argv to the runner with the connection timeout."""
    with patch(
        "mcp_linux_ssh.services.transfer.run_process",
        new_callable=AsyncMock,
        return_value=ExecutionResult(exit_code=0, stdout="sent 120 bytes"),
    ) as mock_run:
        result = await copy_file("/tmp/a.txt", "/srv/a.txt", connection)

    assert result.stdout == "sent 120 bytes"
    args, kwargs = mock_run.call_args
    assert args[0] == "rsync"
    assert kwargs["timeout"] == connection.timeout
    assert kwargs["label"] == "rsync command"


@pytest.mark.asyncio
async def test_patch_file_streams_diff_to_stdin(connection: ConnectionSpec) -> None:
    """The whole diff is the stdin payload of the remote patch process."""
    patch_result = ExecutionResult(
        exit_code=0, stdout="patching file /etc/motd", stderr=""
    )

    with patch(
        "mcp_linux_ssh.services.transfer.run_process",
        new_callable=AsyncMock,
        return_value=patch_result,
    ) as mock_run:
        result = await patch_file(DIFF, "/etc/motd", connection)

    assert result is patch_result
    args, kwargs = mock_run.call_args
    assert args[0] == "ssh"
    assert list(args[1])[-2:] == ["patch", "/etc/motd"]
    assert kwargs["input_data"] == DIFF
    assert kwargs["label"] == "Patch command"


@pytest.mark.asyncio
async def test_patch_failure_is_a_result(connection: ConnectionSpec) -> None:
    """A rejected hunk is reported through patch's own exit code."""
    with patch(
        "mcp_linux_ssh.services.transfer.run_process",
        new_callable=AsyncMock,
        return_value=ExecutionResult(
            exit_code=1, stdout="1 out of 1 hunk FAILED", stderr=""
        ),
    ):
        result = await patch_file(DIFF, "/etc/motd", connection)

    assert result.to_dict() == {
        "status_code": 1,
        "stdout": "1 out of 1 hunk FAILED",
        "stderr": "",
    }
