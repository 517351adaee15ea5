"""Command execution data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CommandSpec:
    """An executable and its ordered arguments."""

    executable: str
    args: tuple[str, ...] = ()

    def as_sudo(self) -> "CommandSpec":
        """Wrap this command in sudo."""
        return CommandSpec("sudo", (self.executable, *self.args))

    def mentions(self, needle: str) -> bool:
        """Check whether the executable or any argument contains needle."""
        return needle in self.executable or any(needle in arg for arg in self.args)


@dataclass
class ExecutionResult:
    """Result of a finished subprocess.

    A nonzero exit_code is still a completed run. exit_code is None when the
    process was terminated by a signal.
    """

    exit_code: int | None
    stdout: str = ""
    stderr: str = field(default="")

    def to_dict(self) -> dict[str, Any]:
        """Structured tool output."""
        return {
            "status_code": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
        }
