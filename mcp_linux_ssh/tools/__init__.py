"""MCP tools for mcp_linux_ssh."""

from mcp_linux_ssh.tools.commands import (
    copy_file,
    patch_file,
    run_local_command,
    run_ssh_command,
    run_ssh_sudo_command,
)

__all__ = [
    "copy_file",
    "patch_file",
    "run_local_command",
    "run_ssh_command",
    "run_ssh_sudo_command",
]
