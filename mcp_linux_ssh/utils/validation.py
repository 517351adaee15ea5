"""Tool parameter validation utilities."""

import os
from typing import Any

from mcp_linux_ssh.errors import DecodeError


def require_str(params: dict[str, Any], key: str, *, allow_empty: bool = False) -> str:
    """Fetch a required string parameter.

    Raises:
        DecodeError: If missing, not a string, or empty
    """
    if key not in params or params[key] is None:
        raise DecodeError(f"Missing required parameter: {key}")
    value = params[key]
    if not isinstance(value, str):
        raise DecodeError(f"Parameter '{key}' must be a string, got {type(value).__name__}")
    if not allow_empty and not value.strip():
        raise DecodeError(f"Parameter '{key}' cannot be empty")
    if "\x00" in value:
        raise DecodeError(f"Parameter '{key}' contains a null byte")
    return value


def optional_str(params: dict[str, Any], key: str) -> str | None:
    """Fetch an optional, non-empty string parameter."""
    if params.get(key) is None:
        return None
    return require_str(params, key)


def str_list(params: dict[str, Any], key: str) -> tuple[str, ...]:
    """Fetch an optional list of strings; missing or None is empty.

    Raises:
        DecodeError: If the value is not a list of strings
    """
    value = params.get(key)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise DecodeError(f"Parameter '{key}' must be a list of strings")
    for item in value:
        if not isinstance(item, str):
            raise DecodeError(f"Parameter '{key}' must contain only strings, got {item!r}")
        if "\x00" in item:
            raise DecodeError(f"Parameter '{key}' contains a null byte")
    return tuple(value)


def timeout_seconds(params: dict[str, Any], default: int) -> int:
    """Fetch timeout_seconds; 0 disables the timeout.

    Raises:
        DecodeError: If negative or not an integer
    """
    value = params.get("timeout_seconds")
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError("Parameter 'timeout_seconds' must be an integer")
    if value < 0:
        raise DecodeError("Parameter 'timeout_seconds' cannot be negative")
    return value


def validate_host(host: str) -> str:
    """Validate a host name.

    Args:
        host: The host name to validate

    Returns:
        Validated host name

    Raises:
        DecodeError: If host name is invalid
    """
    if not host:
        raise DecodeError("Host cannot be empty")

    if len(host) > 253:
        raise DecodeError(f"Host name too long: {len(host)} chars")

    # A leading dash would be read by ssh as an option
    if host.startswith("-"):
        raise DecodeError(f"Host cannot start with '-': {host!r}")

    for char in (" ", "/", "\\", ";", "&", "|", "$", "`", "\n", "\r", "\t"):
        if char in host:
            raise DecodeError(f"Host contains invalid characters: {host!r}")

    return host


def validate_ssh_option(option: str) -> str:
    """Validate a raw -o value of the form Key=Value.

    Raises:
        DecodeError: If the option is not key=value
    """
    key, sep, _ = option.partition("=")
    if not sep or not key.strip():
        raise DecodeError(f"SSH option must be key=value, got {option!r}")
    return option


def expand_path(path: str, what: str) -> str:
    """Expand a leading ~ in a local path.

    Raises:
        DecodeError: If the path is empty or the home directory is unknown
    """
    if not path:
        raise DecodeError(f"{what} path cannot be empty")
    expanded = os.path.expanduser(path)
    if expanded.startswith("~"):
        raise DecodeError(f"Failed to expand {what} path: {path}")
    return expanded
