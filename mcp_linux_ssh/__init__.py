"""POSIX administration over SSH as MCP tools."""

__version__ = "0.3.0"
