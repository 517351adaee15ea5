"""Services for mcp_linux_ssh."""

from mcp_linux_ssh.services.dispatcher import (
    TOOL_NAMES,
    decode_tool_call,
    dispatch,
    execute,
)
from mcp_linux_ssh.services.judge import JudgeService, load_judge_service
from mcp_linux_ssh.services.runner import run_process
from mcp_linux_ssh.services.ssh import run_remote_command, run_remote_sudo_command
from mcp_linux_ssh.services.state import get_config, reset_state, set_config
from mcp_linux_ssh.services.transfer import copy_file, patch_file

__all__ = [
    "JudgeService",
    "TOOL_NAMES",
    "copy_file",
    "decode_tool_call",
    "dispatch",
    "execute",
    "get_config",
    "load_judge_service",
    "patch_file",
    "reset_state",
    "run_process",
    "run_remote_command",
    "run_remote_sudo_command",
    "set_config",
]
