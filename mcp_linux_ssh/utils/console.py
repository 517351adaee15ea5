"""Log formatters: colorful console output and JSON lines for the audit log."""

import logging
import re
from datetime import datetime

from pythonjsonlogger import jsonlogger

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "mcp_linux_ssh.server": COLORS["bright_cyan"],
    "mcp_linux_ssh.services.judge": COLORS["bright_magenta"],
    "mcp_linux_ssh.services.backends": COLORS["magenta"],
    "mcp_linux_ssh.services": COLORS["bright_blue"],
    "mcp_linux_ssh.tools": COLORS["blue"],
    "mcp_linux_ssh.resources": COLORS["cyan"],
    "mcp_linux_ssh.middleware": COLORS["yellow"],
    "mcp_linux_ssh.config": COLORS["green"],
    "default": COLORS["white"],
}

PACKAGE_PREFIX = "mcp_linux_ssh."

_URI_PATTERN = re.compile(r"(\w+://[^\s]+)")
_DURATION_PATTERN = re.compile(r"(\d+\.?\d*ms)")
_DESTINATION_PATTERN = re.compile(r"([\w.\-]+@[\w.\-]+)")


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with local timestamps and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        """Get color for a logger name/component. First matching prefix wins."""
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created).astimezone()
        return f"{dt.strftime('%H:%M:%S')}.{int(record.msecs):03d} {dt.strftime('%m/%d')}"

    def _format_level(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, COLORS["white"])
        return self._colorize(f"{record.levelname:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(PACKAGE_PREFIX):
            name = name[len(PACKAGE_PREFIX):]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a single pipe-separated line."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight_message(self, message: str) -> str:
        """Highlight URIs, durations and user@host destinations."""
        if not self.use_colors:
            return message

        if "://" in message:
            message = _URI_PATTERN.sub(
                f"{COLORS['bright_blue']}\\1{COLORS['reset']}", message
            )
        if "ms" in message:
            message = _DURATION_PATTERN.sub(
                f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message
            )
        if "@" in message:
            message = _DESTINATION_PATTERN.sub(
                f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message
            )
        return message


class MCPRequestFormatter(ColorfulFormatter):
    """Extended formatter with markers for MCP and judge events."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        if not self.use_colors:
            return base

        message = record.getMessage().lower()

        if "judge rejected" in message or "rejecting" in message:
            return f"{COLORS['bright_red']}XX{COLORS['reset']}  {base}"
        if "starting" in message or "ready" in message:
            return f"{COLORS['bright_green']}>>>{COLORS['reset']} {base}"
        if "error" in message or "failed" in message or "timed out" in message:
            return f"{COLORS['bright_red']}!!{COLORS['reset']}  {base}"
        if "warning" in message or "slow" in message or "unavailable" in message:
            return f"{COLORS['bright_yellow']}!{COLORS['reset']}   {base}"
        if "allowed" in message:
            return f"{COLORS['bright_green']}OK{COLORS['reset']}  {base}"

        return f"    {base}"


class JsonLinesFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, for the append-only audit log.

    Attributes passed via ``extra={"tool": ..., "arguments": ...}`` become
    top-level keys of the object.
    """

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
            json_ensure_ascii=False,
        )
