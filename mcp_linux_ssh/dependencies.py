"""Dependency injection container for mcp_linux_ssh.

Everything here is built once when the server is constructed and never
mutated afterwards.
"""

from dataclasses import dataclass

from mcp_linux_ssh.config import Config
from mcp_linux_ssh.services.judge import JudgeService, load_judge_service


@dataclass(frozen=True)
class Dependencies:
    """Container for mcp_linux_ssh dependencies.

    Holds configuration and the (optional) security judge.

    Example:
        deps = Dependencies.create()
        if deps.judge is not None:
            await deps.judge.check("run_ssh_command", params)
    """

    config: Config
    judge: JudgeService | None = None

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from the environment.

        Returns:
            Initialized Dependencies instance
        """
        return cls.from_config(Config.from_env())

    @classmethod
    def from_config(cls, config: Config) -> "Dependencies":
        """Create dependencies with custom configuration.

        Args:
            config: Custom Config instance

        Returns:
            Dependencies with the judge initialized from config.judge
        """
        return cls(config=config, judge=load_judge_service(config.judge))
