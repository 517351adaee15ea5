"""LLM security judge for tool calls.

The judge asks a chat backend whether a tool call should run and expects
a JSON verdict back. When no verdict can be obtained (backend error,
timeout, unparseable reply) the configured fail mode decides: open lets
the call through with a warning, closed rejects it.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from mcp_linux_ssh.config.judge import FailMode, JudgeConfig
from mcp_linux_ssh.errors import ConfigurationError, JudgeDeniedError
from mcp_linux_ssh.models import JudgeVerdict
from mcp_linux_ssh.protocols import ChatBackend
from mcp_linux_ssh.services.backends import create_backend

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a security judge for an SSH command execution system.
Evaluate tool calls for safety and appropriateness.

Consider:
- Destructive operations (rm, format, dd, etc.)
- Sensitive system paths (/etc, /root, /boot, etc.)
- Production vs development environments
- Network operations that could affect connectivity
- File operations that could overwrite critical files

Return JSON: {"allowed": true/false, "reason": "brief explanation"}"""

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def build_user_prompt(tool_name: str, params: dict[str, Any] | None) -> str:
    """Render a tool call for the judge."""
    rendered = json.dumps(params or {}, indent=2, sort_keys=True, default=str)
    return (
        f"Tool: {tool_name}\n"
        f"Parameters:\n{rendered}\n\n"
        "Evaluate if this tool call should be allowed. "
        'Return JSON: {"allowed": true/false, "reason": "brief explanation"}'
    )


def parse_verdict(text: str) -> JudgeVerdict | None:
    """Extract a verdict from model output.

    The whole reply is tried as JSON first, then the outermost {...}
    span (models like to wrap JSON in prose or code fences).

    Returns:
        The verdict, or None when nothing valid could be parsed
    """
    candidates = [text.strip()]
    match = _JSON_OBJECT.search(text)
    if match and match.group(0) != candidates[0]:
        candidates.append(match.group(0))

    for candidate in candidates:
        try:
            return JudgeVerdict.from_dict(json.loads(candidate))
        except ValueError:
            continue
    return None


@dataclass(frozen=True)
class JudgeService:
    """Gate that approves or rejects tool calls before they execute."""

    backend: ChatBackend
    fail_mode: FailMode = FailMode.OPEN
    judged_tools: frozenset[str] = frozenset()
    timeout: float = 10.0

    @classmethod
    def from_config(cls, config: JudgeConfig) -> "JudgeService":
        """Build a judge and its backend from configuration.

        Raises:
            ConfigurationError: If the backend cannot be created
        """
        return cls(
            backend=create_backend(config),
            fail_mode=config.fail_mode,
            judged_tools=config.tools,
            timeout=config.timeout_seconds,
        )

    def should_judge(self, tool_name: str) -> bool:
        """Only tools in the configured set are judged."""
        return tool_name in self.judged_tools

    async def check(self, tool_name: str, params: dict[str, Any] | None) -> None:
        """Approve a tool call or raise.

        Tools outside the judged set pass without contacting the backend.

        Raises:
            JudgeDeniedError: On a negative verdict, or when the judge is
                unavailable and fail_mode is closed
        """
        if not self.should_judge(tool_name):
            return

        try:
            reply = await asyncio.wait_for(
                self.backend.chat(SYSTEM_PROMPT, build_user_prompt(tool_name, params)),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            self._unavailable(tool_name, "LLM judge timeout")
            return
        except Exception as e:
            logger.debug("Judge backend %s failed: %s", self.backend.name, e)
            self._unavailable(tool_name, f"LLM execution failed: {e}")
            return

        verdict = parse_verdict(reply)
        if verdict is None:
            logger.debug("Unparseable judge reply: %r", reply)
            self._unavailable(tool_name, "Failed to parse judge response")
            return

        if not verdict.allowed:
            logger.warning("Judge rejected %s: %s", tool_name, verdict.reason)
            raise JudgeDeniedError(
                f"Tool call rejected by judge: {verdict.reason}", tool_name=tool_name
            )
        logger.info("Judge allowed %s: %s", tool_name, verdict.reason)

    def _unavailable(self, tool_name: str, message: str) -> None:
        """Apply the fail mode when no verdict is available."""
        if self.fail_mode is FailMode.CLOSED:
            logger.error("Judge unavailable (fail_mode=closed), rejecting %s: %s", tool_name, message)
            raise JudgeDeniedError(f"Judge unavailable: {message}", tool_name=tool_name)
        logger.warning(
            "Judge unavailable (fail_mode=open), allowing tool call: %s: %s",
            tool_name,
            message,
        )


def load_judge_service(config: JudgeConfig) -> JudgeService | None:
    """Create the judge at startup, or None when it is disabled.

    A misconfigured backend disables the judge with a warning rather
    than preventing the server from starting.
    """
    if not config.enabled:
        logger.info("Security judge disabled")
        return None

    try:
        service = JudgeService.from_config(config)
    except ConfigurationError as e:
        logger.warning("Failed to initialize security judge, running without it: %s", e)
        return None

    logger.info(
        "Security judge enabled: backend=%s model=%s fail_mode=%s tools=%s",
        service.backend.name,
        config.model,
        config.fail_mode.value,
        ",".join(sorted(config.tools)) or "(none)",
    )
    if config.fail_mode is FailMode.OPEN:
        logger.warning(
            "Security judge runs with fail_mode=open: calls are allowed "
            "whenever the judge cannot answer"
        )
    return service
