"""mcp_linux_ssh FastMCP server.

This is a thin wrapper that wires together the MCP server with tools and resources.
All business logic is delegated to the tools/, resources/, and services/ modules.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from logging.handlers import TimedRotatingFileHandler
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from mcp_linux_ssh.config import Settings
from mcp_linux_ssh.dependencies import Dependencies
from mcp_linux_ssh.middleware import (
    AUDIT_LOGGER_NAME,
    ErrorHandlingMiddleware,
    JudgeMiddleware,
    LoggingMiddleware,
)
from mcp_linux_ssh.resources import public_keys_resource
from mcp_linux_ssh.services.state import set_config
from mcp_linux_ssh.tools import (
    copy_file,
    patch_file,
    run_local_command,
    run_ssh_command,
    run_ssh_sudo_command,
)
from mcp_linux_ssh.utils.console import JsonLinesFormatter, MCPRequestFormatter

SERVER_NAME = "mcp_linux_ssh"

INSTRUCTIONS = (
    "You are an expert POSIX compatible system (Linux, BSD, macOS) system "
    "administrator. You run commands on a remote POSIX compatible system "
    "over SSH to troubleshoot, fix issues and perform general administration. "
    "Use run_ssh_sudo_command only when root privileges are required, prefer "
    "patch_file over rewriting whole files, and read file:///public_keys to "
    "find usable SSH keys."
)

AUDIT_BACKUP_COUNT = 14


def _configure_audit_log(settings: Settings) -> None:
    """Route the audit logger to a daily-rotating JSON-lines file."""
    audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    audit_logger.setLevel(logging.INFO)
    audit_logger.propagate = False

    if settings.audit_log is None or audit_logger.handlers:
        return

    try:
        settings.audit_log.parent.mkdir(parents=True, exist_ok=True)
        handler = TimedRotatingFileHandler(
            settings.audit_log,
            when="midnight",
            backupCount=AUDIT_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        logging.getLogger(__name__).warning(
            "Audit log disabled, cannot open %s: %s", settings.audit_log, e
        )
        return

    handler.setFormatter(JsonLinesFormatter())
    audit_logger.addHandler(handler)


def _configure_logging() -> None:
    """Configure colorful logging for the mcp_linux_ssh package.

    This is called at module load time to ensure logging is configured
    before any loggers are used, regardless of how the server is started.
    Output goes to stderr; stdout carries the stdio transport.
    """
    settings = Settings.from_env()

    use_colors = settings.log_colors and sys.stderr.isatty()

    package_logger = logging.getLogger("mcp_linux_ssh")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Only add handler if not already configured
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    _configure_audit_log(settings)

    # Suppress noisy third-party loggers
    for noisy_logger in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "fastmcp",
        "starlette",
        "anyio",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


# Configure logging at module load time
_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log server startup and shutdown."""
    logger.info("mcp_linux_ssh server ready to accept connections")
    try:
        yield {}
    finally:
        logger.info("mcp_linux_ssh server shutting down")


def configure_middleware(server: FastMCP, deps: Dependencies) -> None:
    """Configure middleware stack for the server.

    Order, outermost first: ErrorHandling -> Logging -> Judge. The judge
    runs innermost so rejected calls are still logged and audited.

    Args:
        server: The FastMCP server to configure.
        deps: Dependencies holding settings and the optional judge.
    """
    settings = deps.config.settings

    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )
    if deps.judge is not None:
        server.add_middleware(JudgeMiddleware(deps.judge))


def create_server(deps: Dependencies | None = None) -> FastMCP:
    """Create and configure the MCP server with all middleware and resources.

    Args:
        deps: Prebuilt dependencies; created from the environment when omitted.

    Returns:
        Configured FastMCP server instance
    """
    if deps is None:
        deps = Dependencies.create()
    set_config(deps.config)

    server = FastMCP(
        SERVER_NAME,
        instructions=INSTRUCTIONS,
        lifespan=app_lifespan,
    )

    configure_middleware(server, deps)

    # Register tools
    server.tool(run_local_command)
    server.tool(run_ssh_command)
    server.tool(run_ssh_sudo_command)
    server.tool(copy_file)
    server.tool(patch_file)

    # Register resources
    server.resource(
        "file:///public_keys",
        name="public_keys",
        description="SSH public keys in ~/.ssh (comma separated)",
        mime_type="text/plain",
    )(public_keys_resource)

    # Add health check endpoint for HTTP transport
    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    logger.info(
        "Server configured: transport=%s multiplex=%s judge=%s",
        deps.config.transport,
        deps.config.multiplex,
        "on" if deps.judge is not None else "off",
    )
    return server


# Default server instance
mcp = create_server()
