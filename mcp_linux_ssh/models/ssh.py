"""SSH-related data models."""

import getpass
from dataclasses import dataclass, field

from mcp_linux_ssh.errors import DecodeError
from mcp_linux_ssh.utils.validation import expand_path

DEFAULT_PRIVATE_KEY = "~/.ssh/id_ed25519"
DEFAULT_TIMEOUT_SECONDS = 30


def current_user() -> str:
    """Login name of the server process, the default remote user.

    Raises:
        DecodeError: If the uid has no passwd entry and USER/LOGNAME are unset
    """
    try:
        return getpass.getuser()
    except (KeyError, OSError) as e:
        raise DecodeError(
            f"Cannot determine the local user name, pass remote_user explicitly: {e}"
        ) from e


@dataclass(frozen=True)
class ConnectionSpec:
    """How to reach a remote host for a single tool call."""

    remote_host: str
    remote_user: str = field(default_factory=current_user)
    private_key: str = DEFAULT_PRIVATE_KEY
    options: tuple[str, ...] = ()
    timeout: int = DEFAULT_TIMEOUT_SECONDS

    @property
    def private_key_path(self) -> str:
        """Private key path with ~ expanded.

        Raises:
            DecodeError: If a ~ or ~user prefix cannot be resolved
        """
        return expand_path(self.private_key, "private key")

    @property
    def destination(self) -> str:
        """user@host form used by rsync targets."""
        return f"{self.remote_user}@{self.remote_host}"
