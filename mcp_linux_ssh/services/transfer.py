"""File transfer operations: rsync copy and remote patch."""

import logging

from mcp_linux_ssh.models import ConnectionSpec, ExecutionResult
from mcp_linux_ssh.services.runner import run_process
from mcp_linux_ssh.services.ssh import (
    SSH_EXECUTABLE,
    build_patch_command,
    get_multiplexing_options,
)
from mcp_linux_ssh.utils.shell import join_command
from mcp_linux_ssh.utils.validation import expand_path

logger = logging.getLogger(__name__)

RSYNC_EXECUTABLE = "rsync"
# -a archive mode, -v verbose, -b keep a backup of files being replaced
RSYNC_FLAGS = "-avb"


def build_rsync_transport(connection: ConnectionSpec, multiplex: bool = False) -> str:
    """Remote shell string for rsync -e.

    StrictHostKeyChecking=yes comes before any caller option; ssh keeps
    the first value it sees, so it cannot be relaxed. Under multiplexing
    the user is passed with -l so the control socket path matches the
    one used by plain ssh commands.
    """
    argv = [SSH_EXECUTABLE, "-i", connection.private_key_path]
    if multiplex:
        argv.extend(["-l", connection.remote_user])
    options = ["StrictHostKeyChecking=yes"]
    if multiplex:
        options.extend(get_multiplexing_options())
    options.extend(connection.options)
    for option in options:
        argv.extend(["-o", option])
    return join_command(argv)


def build_rsync_target(
    connection: ConnectionSpec,
    destination: str,
    multiplex: bool = False,
) -> str:
    """rsync destination: user@host:path, or host:path under multiplexing."""
    if multiplex:
        return f"{connection.remote_host}:{destination}"
    return f"{connection.destination}:{destination}"


def build_copy_command(
    source: str,
    destination: str,
    connection: ConnectionSpec,
    multiplex: bool = False,
) -> list[str]:
    """Full rsync argv for copying a local file to the remote host.

    Raises:
        DecodeError: If the source path cannot be expanded
    """
    return [
        RSYNC_EXECUTABLE,
        RSYNC_FLAGS,
        "-e",
        build_rsync_transport(connection, multiplex),
        expand_path(source, "source"),
        build_rsync_target(connection, destination, multiplex),
    ]


async def copy_file(
    source: str,
    destination: str,
    connection: ConnectionSpec,
    multiplex: bool = False,
) -> ExecutionResult:
    """Copy a local file to the remote host with rsync over SSH.

    Existing destination files are kept as rsync backups (name~).

    Returns:
        rsync's ExecutionResult; a failed transfer is a nonzero exit_code

    Raises:
        DecodeError: If the source path cannot be expanded
        ExecutionError: If rsync cannot be run
        ExecutionTimeoutError: If the connection timeout expires
    """
    argv = build_copy_command(source, destination, connection, multiplex)
    logger.info("Copying %s -> %s", argv[4], argv[5])
    return await run_process(
        argv[0], argv[1:], timeout=connection.timeout, label="rsync command"
    )


async def patch_file(
    patch: str,
    remote_file: str,
    connection: ConnectionSpec,
    multiplex: bool = False,
) -> ExecutionResult:
    """Apply a diff to a remote file by piping it into remote patch(1).

    patch detects the strip level itself; unified diffs work best.

    Returns:
        patch's own exit code, stdout and stderr
    """
    argv = build_patch_command(connection, remote_file, multiplex)
    logger.info(
        "Patching %s:%s (%d bytes of diff)",
        connection.destination,
        remote_file,
        len(patch.encode("utf-8")),
    )
    return await run_process(
        argv[0],
        argv[1:],
        input_data=patch,
        timeout=connection.timeout,
        label="Patch command",
    )
