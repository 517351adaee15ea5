"""SSH argument vectors and remote command execution.

Every remote operation is a plain `ssh` subprocess. Argument shapes:

    ssh <host> -l <user> -i <key> [-o <opt>]... <cmd> <args...>
    ssh <host> -l <user> -i <key> [-o <opt>]... sudo <cmd> <args...>
    ssh <host> -l <user> -i <key> [-o <opt>]... patch <remote_file>

Options precede the remote command; anything after it is passed to the
remote side verbatim.
"""

import logging
import os

from mcp_linux_ssh.errors import SudoNotPermittedError
from mcp_linux_ssh.models import CommandSpec, ConnectionSpec, ExecutionResult
from mcp_linux_ssh.services.runner import run_process

logger = logging.getLogger(__name__)

SSH_EXECUTABLE = "ssh"
CONTROL_PATH_TEMPLATE = "~/.ssh/control-%h-%p-%r"
CONTROL_PERSIST = "10m"


def get_multiplexing_options() -> list[str]:
    """SSH options that share one authenticated session per host.

    ControlMaster=auto reuses an existing master or becomes one,
    ControlPersist keeps it alive after the last client exits.
    StrictHostKeyChecking=yes makes an unknown host fail immediately,
    since there is no terminal to answer the prompt.
    """
    return [
        "ControlMaster=auto",
        f"ControlPath={os.path.expanduser(CONTROL_PATH_TEMPLATE)}",
        f"ControlPersist={CONTROL_PERSIST}",
        "StrictHostKeyChecking=yes",
    ]


def resolve_options(connection: ConnectionSpec, multiplex: bool = False) -> list[str]:
    """Multiplexing options (when enabled) followed by the caller's options."""
    options = get_multiplexing_options() if multiplex else []
    options.extend(connection.options)
    return options


def _option_flags(options: list[str]) -> list[str]:
    flags: list[str] = []
    for option in options:
        flags.extend(["-o", option])
    return flags


def build_ssh_base(connection: ConnectionSpec, multiplex: bool = False) -> list[str]:
    """ssh invocation up to (not including) the remote command."""
    return [
        SSH_EXECUTABLE,
        connection.remote_host,
        "-l",
        connection.remote_user,
        "-i",
        connection.private_key_path,
        *_option_flags(resolve_options(connection, multiplex)),
    ]


def build_ssh_command(
    connection: ConnectionSpec,
    command: CommandSpec,
    multiplex: bool = False,
) -> list[str]:
    """Full argv for running command on the remote host."""
    return [*build_ssh_base(connection, multiplex), command.executable, *command.args]


def build_sudo_command(
    connection: ConnectionSpec,
    command: CommandSpec,
    multiplex: bool = False,
) -> list[str]:
    """Full argv for running command under sudo on the remote host."""
    return build_ssh_command(connection, command.as_sudo(), multiplex)


def build_patch_command(
    connection: ConnectionSpec,
    remote_file: str,
    multiplex: bool = False,
) -> list[str]:
    """Full argv for a remote patch(1) that reads the diff from stdin."""
    return [*build_ssh_base(connection, multiplex), "patch", remote_file]


def check_no_sudo(command: CommandSpec) -> None:
    """Reject sudo on the non-privileged path.

    A substring check only; it keeps the model on the sudo tool and is
    not a security boundary.

    Raises:
        SudoNotPermittedError: If "sudo" appears anywhere in the command
    """
    if command.mentions("sudo"):
        raise SudoNotPermittedError()


async def run_remote_command(
    connection: ConnectionSpec,
    command: CommandSpec,
    multiplex: bool = False,
) -> ExecutionResult:
    """Run a command over SSH without sudo.

    Raises:
        SudoNotPermittedError: Before spawning, if the command mentions sudo
        ExecutionError: If ssh cannot be run
        ExecutionTimeoutError: If the connection timeout expires
    """
    check_no_sudo(command)
    argv = build_ssh_command(connection, command, multiplex)
    logger.info(
        "Running on %s: %s %s",
        connection.destination,
        command.executable,
        " ".join(command.args),
    )
    return await run_process(
        argv[0], argv[1:], timeout=connection.timeout, label="SSH command"
    )


async def run_remote_sudo_command(
    connection: ConnectionSpec,
    command: CommandSpec,
    multiplex: bool = False,
) -> ExecutionResult:
    """Run a command over SSH under sudo."""
    argv = build_sudo_command(connection, command, multiplex)
    logger.info(
        "Running with sudo on %s: %s %s",
        connection.destination,
        command.executable,
        " ".join(command.args),
    )
    return await run_process(
        argv[0], argv[1:], timeout=connection.timeout, label="SSH sudo command"
    )
