"""Security judge configuration.

Read once at startup from MCP_LINUX_SSH_JUDGE_* variables:

    SERVICE          backend id (openai, anthropic, ollama, gemini); empty disables
    MODEL            model name (default: gpt-4o-mini)
    API_KEY          credential for keyed backends
    BASE_URL         endpoint override
    TIMEOUT_SECONDS  judge timeout (default: 10)
    FAIL_MODE        open | closed (default: open)
    TOOLS            comma-separated tool names to judge
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum

from mcp_linux_ssh.errors import ConfigurationError

logger = logging.getLogger(__name__)

JUDGE_ENV_PREFIX = "MCP_LINUX_SSH_JUDGE_"

DEFAULT_JUDGED_TOOLS = frozenset(
    {
        "run_ssh_command",
        "run_ssh_sudo_command",
        "copy_file",
        "patch_file",
    }
)


class FailMode(Enum):
    """What to do when the judge cannot give a verdict."""

    OPEN = "open"
    CLOSED = "closed"

    @classmethod
    def parse(cls, value: str) -> "FailMode":
        """Parse a fail mode string (case-insensitive).

        Raises:
            ConfigurationError: If value is not open or closed
        """
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            raise ConfigurationError(f"Invalid fail mode: {value}") from e


class JudgeBackend(Enum):
    """Supported policy reviewer backends."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    OLLAMA = "ollama"
    GEMINI = "gemini"

    @classmethod
    def parse(cls, value: str) -> "JudgeBackend":
        """Parse a backend id.

        Raises:
            ConfigurationError: If the backend is not supported
        """
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            supported = ", ".join(b.value for b in cls)
            raise ConfigurationError(
                f"Unsupported provider type: {value}. Supported: {supported}"
            ) from e

    @property
    def requires_api_key(self) -> bool:
        """Whether this backend needs a credential."""
        return self is not JudgeBackend.OLLAMA


def parse_tool_names(value: str) -> frozenset[str]:
    """Split a comma-separated tool list, dropping blanks."""
    return frozenset(name.strip() for name in value.split(",") if name.strip())


@dataclass(frozen=True)
class JudgeConfig:
    """Immutable judge configuration."""

    service: str = ""
    model: str = "gpt-4o-mini"
    api_key: str = field(default="", repr=False)
    base_url: str = ""
    timeout_seconds: float = 10.0
    fail_mode: FailMode = FailMode.OPEN
    tools: frozenset[str] = DEFAULT_JUDGED_TOOLS

    @property
    def enabled(self) -> bool:
        """A judge runs only when a backend id is set."""
        return bool(self.service)

    @classmethod
    def from_env(cls) -> "JudgeConfig":
        """Load judge configuration from the environment.

        Raises:
            ConfigurationError: If FAIL_MODE or TIMEOUT_SECONDS is invalid
        """
        timeout_raw = os.getenv(f"{JUDGE_ENV_PREFIX}TIMEOUT_SECONDS", "10")
        try:
            timeout = float(timeout_raw)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid judge timeout: {timeout_raw}"
            ) from e
        if timeout <= 0:
            raise ConfigurationError(f"Judge timeout must be > 0, got {timeout_raw}")

        tools_raw = os.getenv(f"{JUDGE_ENV_PREFIX}TOOLS")
        tools = DEFAULT_JUDGED_TOOLS if tools_raw is None else parse_tool_names(tools_raw)

        return cls(
            service=os.getenv(f"{JUDGE_ENV_PREFIX}SERVICE", "").strip(),
            model=os.getenv(f"{JUDGE_ENV_PREFIX}MODEL", "gpt-4o-mini"),
            api_key=os.getenv(f"{JUDGE_ENV_PREFIX}API_KEY", ""),
            base_url=os.getenv(f"{JUDGE_ENV_PREFIX}BASE_URL", "").strip(),
            timeout_seconds=timeout,
            fail_mode=FailMode.parse(os.getenv(f"{JUDGE_ENV_PREFIX}FAIL_MODE", "open")),
            tools=tools,
        )
