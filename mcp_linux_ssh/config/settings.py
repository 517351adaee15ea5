"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "MCP_LINUX_SSH_"


def default_audit_log_path() -> Path:
    """Location of the JSON-lines tool call log.

    Uses $XDG_STATE_HOME when set, else ~/.local/state.
    """
    state_home = os.getenv("XDG_STATE_HOME", "").strip()
    base = Path(state_home) if state_home else Path.home() / ".local" / "state"
    return base / "mcp_linux_ssh" / "tool_calls.jsonl"


@dataclass(frozen=True)
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # SSH
    multiplex: bool = field(default=False)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)
    audit_log: Path | None = field(default=None)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from MCP_LINUX_SSH_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            transport=cls._get_transport(),
            http_host=os.getenv(f"{ENV_PREFIX}HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int(f"{ENV_PREFIX}HTTP_PORT", 8000),
            multiplex=cls._get_bool(f"{ENV_PREFIX}MULTIPLEX", False),
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool(f"{ENV_PREFIX}LOG_COLORS", True),
            log_payloads=cls._get_bool(f"{ENV_PREFIX}LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int(f"{ENV_PREFIX}SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool(f"{ENV_PREFIX}INCLUDE_TRACEBACK", False),
            audit_log=cls._get_audit_log(),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("stdio" or "http")
        """
        transport = os.getenv(f"{ENV_PREFIX}TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        if transport:
            logger.warning("Unknown transport %r, using stdio", transport)
        return "stdio"

    @staticmethod
    def _get_audit_log() -> Path | None:
        """Get audit log path. The special value "none" disables it."""
        value = os.getenv(f"{ENV_PREFIX}AUDIT_LOG", "").strip()
        if value.lower() == "none":
            return None
        if value:
            return Path(os.path.expanduser(value))
        return default_audit_log_path()
