"""Shared fixtures for mcp_linux_ssh tests."""

import logging
import os

import pytest

# Importing the server configures logging and builds a default server from
# the environment; keep that from touching the real audit log or a real judge.
os.environ["MCP_LINUX_SSH_AUDIT_LOG"] = "none"
os.environ.pop("MCP_LINUX_SSH_JUDGE_SERVICE", None)
os.environ.pop("MCP_LINUX_SSH_MULTIPLEX", None)

from mcp_linux_ssh.services.state import reset_state  # noqa: E402


@pytest.fixture(autouse=True)
def clean_state():
    """Start every test without a cached global config."""
    reset_state()
    yield
    reset_state()


@pytest.fixture(autouse=True)
def propagate_package_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    """Let caplog see package records even after server.py disabled propagation."""
    monkeypatch.setattr(logging.getLogger("mcp_linux_ssh"), "propagate", True)
