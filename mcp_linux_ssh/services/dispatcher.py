"""Decode tool calls into typed requests and run them."""

import logging
from collections.abc import Callable
from typing import Any

from mcp_linux_ssh.errors import DecodeError
from mcp_linux_ssh.models import (
    CommandSpec,
    ConnectionSpec,
    CopyFile,
    ExecutionResult,
    LocalRun,
    PatchFile,
    RemoteRun,
    RemoteSudoRun,
    ToolRequest,
)
from mcp_linux_ssh.models.ssh import DEFAULT_PRIVATE_KEY, DEFAULT_TIMEOUT_SECONDS
from mcp_linux_ssh.services.runner import run_process
from mcp_linux_ssh.services.ssh import (
    check_no_sudo,
    run_remote_command,
    run_remote_sudo_command,
)
from mcp_linux_ssh.services.transfer import copy_file, patch_file
from mcp_linux_ssh.utils.validation import (
    expand_path,
    optional_str,
    require_str,
    str_list,
    timeout_seconds,
    validate_host,
    validate_ssh_option,
)

logger = logging.getLogger(__name__)

RUN_LOCAL_COMMAND = "run_local_command"
RUN_SSH_COMMAND = "run_ssh_command"
RUN_SSH_SUDO_COMMAND = "run_ssh_sudo_command"
COPY_FILE = "copy_file"
PATCH_FILE = "patch_file"


def decode_connection(params: dict[str, Any]) -> ConnectionSpec:
    """Build a ConnectionSpec from flattened tool parameters."""
    host = validate_host(require_str(params, "remote_host"))
    user = optional_str(params, "remote_user")
    key = optional_str(params, "private_key") or DEFAULT_PRIVATE_KEY
    expand_path(key, "private key")
    options = tuple(validate_ssh_option(opt) for opt in str_list(params, "options"))
    timeout = timeout_seconds(params, DEFAULT_TIMEOUT_SECONDS)

    if user is None:
        return ConnectionSpec(
            remote_host=host, private_key=key, options=options, timeout=timeout
        )
    return ConnectionSpec(
        remote_host=host,
        remote_user=user,
        private_key=key,
        options=options,
        timeout=timeout,
    )


def decode_command(params: dict[str, Any]) -> CommandSpec:
    """Build a CommandSpec from cmd/args parameters."""
    return CommandSpec(
        executable=require_str(params, "cmd"),
        args=str_list(params, "args"),
    )


def _decode_local(params: dict[str, Any]) -> LocalRun:
    return LocalRun(
        command=decode_command(params),
        timeout=timeout_seconds(params, DEFAULT_TIMEOUT_SECONDS),
    )


def _decode_remote(params: dict[str, Any]) -> RemoteRun:
    command = decode_command(params)
    check_no_sudo(command)
    return RemoteRun(command=command, connection=decode_connection(params))


def _decode_remote_sudo(params: dict[str, Any]) -> RemoteSudoRun:
    return RemoteSudoRun(
        command=decode_command(params),
        connection=decode_connection(params),
    )


def _decode_copy(params: dict[str, Any]) -> CopyFile:
    return CopyFile(
        source=require_str(params, "source"),
        destination=require_str(params, "destination"),
        connection=decode_connection(params),
    )


def _decode_patch(params: dict[str, Any]) -> PatchFile:
    return PatchFile(
        patch=require_str(params, "patch", allow_empty=True),
        remote_file=require_str(params, "remote_file"),
        connection=decode_connection(params),
    )


DECODERS: dict[str, Callable[[dict[str, Any]], ToolRequest]] = {
    RUN_LOCAL_COMMAND: _decode_local,
    RUN_SSH_COMMAND: _decode_remote,
    RUN_SSH_SUDO_COMMAND: _decode_remote_sudo,
    COPY_FILE: _decode_copy,
    PATCH_FILE: _decode_patch,
}

TOOL_NAMES = frozenset(DECODERS)


def decode_tool_call(tool_name: str, arguments: dict[str, Any] | None) -> ToolRequest:
    """Decode a tool name and its arguments into one request variant.

    Raises:
        DecodeError: For unknown tools or malformed parameters
    """
    decoder = DECODERS.get(tool_name)
    if decoder is None:
        raise DecodeError(f"Unknown tool: {tool_name}")
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise DecodeError(f"Arguments for {tool_name} must be an object")
    return decoder(arguments)


async def execute(request: ToolRequest, multiplex: bool = False) -> ExecutionResult:
    """Run a decoded request with its matching handler."""
    match request:
        case LocalRun(command=command, timeout=timeout):
            logger.info("Running locally: %s %s", command.executable, " ".join(command.args))
            return await run_process(
                command.executable, command.args, timeout=timeout, label="Local command"
            )
        case RemoteRun(command=command, connection=connection):
            return await run_remote_command(connection, command, multiplex)
        case RemoteSudoRun(command=command, connection=connection):
            return await run_remote_sudo_command(connection, command, multiplex)
        case CopyFile(source=source, destination=destination, connection=connection):
            return await copy_file(source, destination, connection, multiplex)
        case PatchFile(patch=patch, remote_file=remote_file, connection=connection):
            return await patch_file(patch, remote_file, connection, multiplex)
        case _:
            raise DecodeError(f"Unsupported request: {type(request).__name__}")


async def dispatch(
    tool_name: str,
    arguments: dict[str, Any] | None,
    multiplex: bool = False,
) -> ExecutionResult:
    """Decode and execute a single tool call. No retries."""
    request = decode_tool_call(tool_name, arguments)
    return await execute(request, multiplex)
