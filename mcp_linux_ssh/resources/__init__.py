"""MCP resources for mcp_linux_ssh."""

from mcp_linux_ssh.resources.keys import public_keys_resource

__all__ = ["public_keys_resource"]
