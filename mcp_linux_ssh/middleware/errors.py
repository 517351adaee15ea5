"""Error logging middleware."""

import logging
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from mcp_linux_ssh.middleware.base import LinuxSSHMiddleware


class ErrorHandlingMiddleware(LinuxSSHMiddleware):
    """Logs every failed request under the error type that caused it.

    Tools wrap ``LinuxSSHError`` in ``ToolError``; the wrapped error's
    type is logged so a timeout and a decode failure stay distinguishable.
    Errors are always re-raised for FastMCP to report to the client.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        super().__init__(logger=logger)
        self.include_traceback = include_traceback

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        try:
            return await call_next(context)
        except Exception as e:
            cause = e.__cause__ if e.__cause__ is not None else e
            self.logger.error(
                "Error in %s: %s: %s",
                context.method,
                type(cause).__name__,
                str(e),
                exc_info=e if self.include_traceback else None,
            )
            raise
