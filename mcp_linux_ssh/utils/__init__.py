"""Utility helpers for mcp_linux_ssh."""
