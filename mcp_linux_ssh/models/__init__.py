"""Data models for mcp_linux_ssh."""

from mcp_linux_ssh.models.command import CommandSpec, ExecutionResult
from mcp_linux_ssh.models.judge import JudgeVerdict
from mcp_linux_ssh.models.requests import (
    CopyFile,
    LocalRun,
    PatchFile,
    RemoteRun,
    RemoteSudoRun,
    ToolRequest,
)
from mcp_linux_ssh.models.ssh import ConnectionSpec

__all__ = [
    "CommandSpec",
    "ConnectionSpec",
    "CopyFile",
    "ExecutionResult",
    "JudgeVerdict",
    "LocalRun",
    "PatchFile",
    "RemoteRun",
    "RemoteSudoRun",
    "ToolRequest",
]
