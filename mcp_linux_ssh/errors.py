"""Error types for tool execution and the judge gate."""


class LinuxSSHError(Exception):
    """Base class for errors surfaced to the tool caller."""


class ConfigurationError(LinuxSSHError):
    """Invalid startup configuration for a subsystem."""


class DecodeError(LinuxSSHError):
    """Tool parameters could not be decoded. Nothing was spawned."""


class SudoNotPermittedError(DecodeError):
    """The non-privileged remote tool was asked to run sudo."""

    def __init__(self) -> None:
        super().__init__("You may not run commands with sudo using this tool")


class ExecutionError(LinuxSSHError):
    """A subprocess could not be spawned, fed, or awaited."""


class ExecutionTimeoutError(LinuxSSHError):
    """A subprocess did not finish within its timeout."""

    def __init__(self, label: str, timeout: float):
        """Initialize timeout error.

        Args:
            label: Short description of what timed out (e.g. "SSH command")
            timeout: The configured timeout in seconds
        """
        self.label = label
        self.timeout = timeout
        super().__init__(f"{label} timed out after {timeout:g} seconds")


class JudgeDeniedError(LinuxSSHError):
    """The security judge blocked a tool call."""

    def __init__(self, message: str, tool_name: str | None = None):
        self.tool_name = tool_name
        super().__init__(message)
