"""Logging middleware for request/response tracking."""

import json
import logging
import time
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from mcp_linux_ssh.middleware.base import LinuxSSHMiddleware

AUDIT_LOGGER_NAME = "mcp_linux_ssh.audit"


class LoggingMiddleware(LinuxSSHMiddleware):
    """Middleware that logs MCP requests and responses with timing.

    Every tool call is also written as one structured record to the
    ``mcp_linux_ssh.audit`` logger, which the server routes to the
    JSON-lines audit file.

    Example:
        >>> middleware = LoggingMiddleware(include_payloads=True)
        >>> mcp.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_payloads: bool = False,
        max_payload_length: int = 1000,
        slow_threshold_ms: float = 1000.0,
        audit_logger: logging.Logger | None = None,
    ) -> None:
        """Initialize logging middleware.

        Args:
            logger: Optional custom logger.
            include_payloads: Whether to log request/response payloads.
            max_payload_length: Maximum payload length before truncation.
            slow_threshold_ms: Threshold in ms for slow request warnings.
            audit_logger: Logger receiving one record per tool call.
        """
        super().__init__(logger=logger)
        self.include_payloads = include_payloads
        self.max_payload_length = max_payload_length
        self.slow_threshold_ms = slow_threshold_ms
        self.audit_logger = audit_logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def _truncate(self, data: Any) -> str:
        """Truncate data to max payload length."""
        try:
            text = json.dumps(data, default=str)
        except (TypeError, ValueError):
            text = str(data)

        if len(text) > self.max_payload_length:
            return text[: self.max_payload_length] + "... [truncated]"
        return text

    def _format_args(self, args: dict[str, Any] | None) -> str:
        """Format tool arguments for logging."""
        if not args:
            return "()"
        parts = []
        for key, value in args.items():
            if isinstance(value, str) and len(value) > 50:
                value = value[:50] + "..."
            parts.append(f"{key}={value!r}")
        return f"({', '.join(parts)})"

    def _format_duration(self, duration_ms: float) -> str:
        """Format duration with slow indicator if needed."""
        if duration_ms >= self.slow_threshold_ms:
            return f"{duration_ms:.1f}ms SLOW!"
        return f"{duration_ms:.1f}ms"

    def _audit(
        self,
        tool_name: str,
        args: dict[str, Any] | None,
        outcome: str,
        duration_ms: float,
        status_code: int | None = None,
    ) -> None:
        self.audit_logger.info(
            "tool call %s: %s",
            tool_name,
            outcome,
            extra={
                "tool": tool_name,
                "arguments": args or {},
                "outcome": outcome,
                "status_code": status_code,
                "duration_ms": round(duration_ms, 1),
            },
        )

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log tool calls with name, arguments, and timing."""
        start = time.perf_counter()
        tool_name = getattr(context.message, "name", "unknown")
        args = getattr(context.message, "arguments", None)

        self.logger.info(">>> TOOL: %s%s", tool_name, self._format_args(args))

        if self.include_payloads and args:
            self.logger.debug("    Args: %s", self._truncate(args))

        try:
            result = await call_next(context)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            self.logger.error(
                "!!! TOOL: %s -> %s: %s [%s]",
                tool_name,
                type(e).__name__,
                str(e),
                self._format_duration(duration_ms),
            )
            self._audit(tool_name, args, f"error: {e}", duration_ms)
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        status_code = self._status_code(result)

        log_level = logging.WARNING if duration_ms >= self.slow_threshold_ms else logging.INFO
        self.logger.log(
            log_level,
            "<<< TOOL: %s -> %s [%s]",
            tool_name,
            self._summarize_result(result),
            self._format_duration(duration_ms),
        )
        if self.include_payloads and result is not None:
            self.logger.debug("    Result: %s", self._truncate(self._structured(result)))

        self._audit(tool_name, args, "completed", duration_ms, status_code)
        return result

    async def on_read_resource(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log resource reads with URI and timing."""
        start = time.perf_counter()
        uri = getattr(context.message, "uri", "unknown")

        self.logger.info(">>> RESOURCE: %s", uri)

        try:
            result = await call_next(context)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            self.logger.error(
                "!!! RESOURCE: %s -> %s: %s [%s]",
                uri,
                type(e).__name__,
                str(e),
                self._format_duration(duration_ms),
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        self.logger.info(
            "<<< RESOURCE: %s -> %s [%s]",
            uri,
            self._summarize_result(result),
            self._format_duration(duration_ms),
        )
        return result

    async def on_list_tools(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log tool listing requests."""
        start = time.perf_counter()
        self.logger.info(">>> LIST TOOLS")

        result = await call_next(context)
        duration_ms = (time.perf_counter() - start) * 1000

        tool_count: int | str = "?"
        if hasattr(result, "tools"):
            tool_count = len(result.tools)
        elif isinstance(result, (list, tuple)):
            tool_count = len(result)

        self.logger.info(
            "<<< LIST TOOLS -> %s tool(s) [%s]",
            tool_count,
            self._format_duration(duration_ms),
        )
        return result

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log generic messages that aren't caught by specific handlers."""
        method = context.method

        # Skip methods that have dedicated handlers
        if method in ("tools/call", "resources/read", "tools/list"):
            return await call_next(context)

        start = time.perf_counter()
        self.logger.debug(">>> MCP: %s", method)
        result = await call_next(context)
        self.logger.debug(
            "<<< MCP: %s [%s]",
            method,
            self._format_duration((time.perf_counter() - start) * 1000),
        )
        return result

    @staticmethod
    def _structured(result: Any) -> Any:
        """Structured content of a tool result, or the result itself."""
        structured = getattr(result, "structured_content", None)
        return structured if structured is not None else result

    def _status_code(self, result: Any) -> int | None:
        structured = self._structured(result)
        if isinstance(structured, dict):
            return structured.get("status_code")
        return None

    def _summarize_result(self, result: Any) -> str:
        """Create a brief summary of a result for logging."""
        if result is None:
            return "null"

        structured = self._structured(result)
        if isinstance(structured, dict) and "status_code" in structured:
            stdout = structured.get("stdout") or ""
            stderr = structured.get("stderr") or ""
            return (
                f"status={structured['status_code']} "
                f"stdout={len(stdout)} chars stderr={len(stderr)} chars"
            )

        if isinstance(result, str):
            lines = result.count("\n") + 1
            if lines > 1:
                return f"{len(result)} chars, {lines} lines"
            return f"{len(result)} chars"

        if isinstance(result, (list, tuple)):
            return f"{len(result)} items"

        if isinstance(result, dict):
            return f"{len(result)} keys"

        # MCP responses
        if hasattr(result, "content"):
            content = result.content
            if isinstance(content, (list, tuple)):
                return f"{len(content)} content item(s)"
            return "content"

        return type(result).__name__
