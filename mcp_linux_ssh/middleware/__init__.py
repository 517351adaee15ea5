"""mcp_linux_ssh middleware components."""

from mcp_linux_ssh.middleware.base import LinuxSSHMiddleware
from mcp_linux_ssh.middleware.errors import ErrorHandlingMiddleware
from mcp_linux_ssh.middleware.judge import JudgeMiddleware
from mcp_linux_ssh.middleware.logging import AUDIT_LOGGER_NAME, LoggingMiddleware

__all__ = [
    "AUDIT_LOGGER_NAME",
    "ErrorHandlingMiddleware",
    "JudgeMiddleware",
    "LinuxSSHMiddleware",
    "LoggingMiddleware",
]
