"""Base middleware class for mcp_linux_ssh."""

import logging

from fastmcp.server.middleware import Middleware


class LinuxSSHMiddleware(Middleware):
    """Base middleware with common functionality for mcp_linux_ssh.

    Provides:
        - Configurable logger
        - Common initialization patterns
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize middleware.

        Args:
            logger: Optional custom logger. Defaults to module logger.
        """
        self.logger = logger or logging.getLogger(__name__)
