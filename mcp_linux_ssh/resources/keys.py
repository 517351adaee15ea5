"""SSH public key listing resource."""

import logging
from pathlib import Path

from fastmcp.exceptions import ResourceError

logger = logging.getLogger(__name__)


def ssh_directory() -> Path:
    """The current user's ~/.ssh directory."""
    return Path.home() / ".ssh"


async def public_keys_resource() -> str:
    """List public keys available to pass as private_key to the SSH tools.

    Returns:
        Comma-separated file names of ``*.pub`` files in ~/.ssh, sorted.
        The matching private key is the same name without ``.pub``.

    Raises:
        ResourceError: If ~/.ssh does not exist or cannot be read
    """
    ssh_dir = ssh_directory()
    if not ssh_dir.is_dir():
        raise ResourceError(f"SSH directory not found: {ssh_dir}")

    try:
        names = sorted(
            entry.name
            for entry in ssh_dir.iterdir()
            if entry.suffix == ".pub" and entry.is_file()
        )
    except OSError as e:
        raise ResourceError(f"Failed to read {ssh_dir}: {e}") from e

    logger.debug("Found %d public key(s) in %s", len(names), ssh_dir)
    return ",".join(names)
