"""Configuration module for mcp_linux_ssh.

- Config: Main configuration class (aggregates all components)
- Settings: Server environment variable configuration
- JudgeConfig: Security judge configuration
"""

from mcp_linux_ssh.config.judge import FailMode, JudgeBackend, JudgeConfig
from mcp_linux_ssh.config.main import Config
from mcp_linux_ssh.config.settings import Settings

__all__ = ["Config", "FailMode", "JudgeBackend", "JudgeConfig", "Settings"]
