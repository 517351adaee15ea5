"""Application configuration.

Delegates to specialized components:
- Settings: Server environment variables
- JudgeConfig: Security judge environment variables
"""

import logging
from dataclasses import dataclass, field

from mcp_linux_ssh.config.judge import JudgeConfig
from mcp_linux_ssh.config.settings import Settings
from mcp_linux_ssh.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Application configuration.

    Aggregates server settings and judge configuration.
    """

    settings: Settings = field(default_factory=Settings)
    judge: JudgeConfig = field(default_factory=JudgeConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        An invalid judge configuration disables the judge instead of
        failing the whole server.

        Returns:
            Configured instance with all components initialized
        """
        settings = Settings.from_env()
        try:
            judge = JudgeConfig.from_env()
        except ConfigurationError as e:
            logger.warning("Failed to load judge configuration: %s", e)
            judge = JudgeConfig()
        return cls(settings=settings, judge=judge)

    # Delegate to settings for convenience
    @property
    def transport(self) -> str:
        """Transport type (stdio or http)."""
        return self.settings.transport

    @property
    def http_host(self) -> str:
        """HTTP server bind address."""
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        """HTTP server port."""
        return self.settings.http_port

    @property
    def multiplex(self) -> bool:
        """Whether SSH connection multiplexing is enabled."""
        return self.settings.multiplex
