"""Command execution and file transfer tools.

Each tool is a thin wrapper: collect the call's parameters, hand them to
the dispatcher, and return the process result as structured content.
A nonzero exit status is a normal result; only infrastructure failures
(bad parameters, spawn errors, timeouts) become tool errors.
"""

import logging
from typing import Any

from fastmcp.exceptions import ToolError

from mcp_linux_ssh.errors import LinuxSSHError
from mcp_linux_ssh.models.ssh import DEFAULT_PRIVATE_KEY, DEFAULT_TIMEOUT_SECONDS
from mcp_linux_ssh.services.dispatcher import (
    COPY_FILE,
    PATCH_FILE,
    RUN_LOCAL_COMMAND,
    RUN_SSH_COMMAND,
    RUN_SSH_SUDO_COMMAND,
    dispatch,
)
from mcp_linux_ssh.services.state import get_config

logger = logging.getLogger(__name__)


def _connection_params(
    remote_host: str,
    remote_user: str | None,
    private_key: str,
    timeout_seconds: int,
    options: list[str] | None,
) -> dict[str, Any]:
    params: dict[str, Any] = {
        "remote_host": remote_host,
        "private_key": private_key,
        "timeout_seconds": timeout_seconds,
        "options": options or [],
    }
    if remote_user:
        params["remote_user"] = remote_user
    return params


async def _run(tool_name: str, params: dict[str, Any]) -> dict[str, Any]:
    """Dispatch one call, translating failures into ToolError."""
    try:
        result = await dispatch(tool_name, params, multiplex=get_config().multiplex)
    except LinuxSSHError as e:
        logger.warning("%s failed: %s", tool_name, e)
        raise ToolError(str(e)) from e
    return result.to_dict()


async def run_local_command(
    cmd: str,
    args: list[str] | None = None,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    """Run a command on the machine hosting this server.

    Args:
        cmd: Executable to run (looked up on PATH, no shell)
        args: Arguments passed verbatim
        timeout_seconds: Seconds before the command is killed; 0 waits forever

    Returns:
        {"status_code", "stdout", "stderr"}
    """
    return await _run(
        RUN_LOCAL_COMMAND,
        {"cmd": cmd, "args": args or [], "timeout_seconds": timeout_seconds},
    )


async def run_ssh_command(
    remote_host: str,
    cmd: str,
    args: list[str] | None = None,
    remote_user: str | None = None,
    private_key: str = DEFAULT_PRIVATE_KEY,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    options: list[str] | None = None,
) -> dict[str, Any]:
    """Run a command on a remote host over SSH. Use run_ssh_sudo_command for sudo.

    Args:
        remote_host: Host name or address
        cmd: Command to run remotely
        args: Arguments for the command
        remote_user: Login user (defaults to the local user)
        private_key: Path to the SSH private key
        timeout_seconds: Seconds before ssh is killed; 0 waits forever
        options: Extra ssh -o options as key=value strings

    Returns:
        {"status_code", "stdout", "stderr"}
    """
    params = _connection_params(remote_host, remote_user, private_key, timeout_seconds, options)
    params.update(cmd=cmd, args=args or [])
    return await _run(RUN_SSH_COMMAND, params)


async def run_ssh_sudo_command(
    remote_host: str,
    cmd: str,
    args: list[str] | None = None,
    remote_user: str | None = None,
    private_key: str = DEFAULT_PRIVATE_KEY,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    options: list[str] | None = None,
) -> dict[str, Any]:
    """Run a command with sudo on a remote host over SSH.

    The remote user must be able to sudo without a password prompt.

    Args:
        remote_host: Host name or address
        cmd: Command to run under sudo
        args: Arguments for the command
        remote_user: Login user (defaults to the local user)
        private_key: Path to the SSH private key
        timeout_seconds: Seconds before ssh is killed; 0 waits forever
        options: Extra ssh -o options as key=value strings

    Returns:
        {"status_code", "stdout", "stderr"}
    """
    params = _connection_params(remote_host, remote_user, private_key, timeout_seconds, options)
    params.update(cmd=cmd, args=args or [])
    return await _run(RUN_SSH_SUDO_COMMAND, params)


async def copy_file(
    remote_host: str,
    source: str,
    destination: str,
    remote_user: str | None = None,
    private_key: str = DEFAULT_PRIVATE_KEY,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    options: list[str] | None = None,
) -> dict[str, Any]:
    """Copy a local file to a remote host with rsync over SSH.

    An existing destination file is kept as a backup with a ~ suffix.

    Args:
        remote_host: Host name or address
        source: Local file path (~ is expanded)
        destination: Path on the remote host
        remote_user: Login user (defaults to the local user)
        private_key: Path to the SSH private key
        timeout_seconds: Seconds before rsync is killed; 0 waits forever
        options: Extra ssh -o options as key=value strings

    Returns:
        {"status_code", "stdout", "stderr"} from rsync
    """
    params = _connection_params(remote_host, remote_user, private_key, timeout_seconds, options)
    params.update(source=source, destination=destination)
    return await _run(COPY_FILE, params)


async def patch_file(
    remote_host: str,
    patch: str,
    remote_file: str,
    remote_user: str | None = None,
    private_key: str = DEFAULT_PRIVATE_KEY,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    options: list[str] | None = None,
) -> dict[str, Any]:
    """Apply a diff to a file on a remote host using patch(1).

    Prefer this over rewriting whole files. Unified diffs work best.

    Args:
        remote_host: Host name or address
        patch: Diff content, piped to the remote patch command
        remote_file: Path of the file to patch on the remote host
        remote_user: Login user (defaults to the local user)
        private_key: Path to the SSH private key
        timeout_seconds: Seconds before ssh is killed; 0 waits forever
        options: Extra ssh -o options as key=value strings

    Returns:
        {"status_code", "stdout", "stderr"} from patch
    """
    params = _connection_params(remote_host, remote_user, private_key, timeout_seconds, options)
    params.update(patch=patch, remote_file=remote_file)
    return await _run(PATCH_FILE, params)
