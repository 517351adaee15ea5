"""Decoded tool requests, one variant per tool."""

from dataclasses import dataclass

from mcp_linux_ssh.models.command import CommandSpec
from mcp_linux_ssh.models.ssh import DEFAULT_TIMEOUT_SECONDS, ConnectionSpec


@dataclass(frozen=True)
class LocalRun:
    """Run a command on the server host itself."""

    command: CommandSpec
    timeout: int = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class RemoteRun:
    """Run a command on a remote host without privilege escalation."""

    command: CommandSpec
    connection: ConnectionSpec


@dataclass(frozen=True)
class RemoteSudoRun:
    """Run a command on a remote host under sudo."""

    command: CommandSpec
    connection: ConnectionSpec


@dataclass(frozen=True)
class CopyFile:
    """Copy a local file to a remote host with rsync."""

    source: str
    destination: str
    connection: ConnectionSpec


@dataclass(frozen=True)
class PatchFile:
    """Apply a diff to a remote file with patch(1)."""

    patch: str
    remote_file: str
    connection: ConnectionSpec


ToolRequest = LocalRun | RemoteRun | RemoteSudoRun | CopyFile | PatchFile
