"""Security judge middleware: approve or reject tool calls before they run."""

import logging
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import MiddlewareContext

from mcp_linux_ssh.errors import JudgeDeniedError
from mcp_linux_ssh.middleware.base import LinuxSSHMiddleware
from mcp_linux_ssh.services.judge import JudgeService


class JudgeMiddleware(LinuxSSHMiddleware):
    """Consult the JudgeService for every tool call.

    Tools outside the judged set, and every other MCP method, pass
    through untouched. A rejected call never reaches the tool function.
    """

    def __init__(
        self,
        judge: JudgeService,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self.judge = judge

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        tool_name = getattr(context.message, "name", "unknown")
        args = getattr(context.message, "arguments", None)

        try:
            await self.judge.check(tool_name, args)
        except JudgeDeniedError as e:
            raise ToolError(str(e)) from e

        return await call_next(context)
