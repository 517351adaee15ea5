"""Chat backends for the security judge, one per provider.

Each backend speaks its provider's HTTP API directly through httpx and
returns plain reply text. A fresh AsyncClient is opened per call so the
backend object itself holds no connection state.
"""

import logging
from typing import Any

import httpx

from mcp_linux_ssh.config.judge import JudgeBackend, JudgeConfig
from mcp_linux_ssh.errors import ConfigurationError
from mcp_linux_ssh.protocols import ChatBackend

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
ANTHROPIC_MAX_TOKENS = 1024


class HTTPChatBackend:
    """Shared request plumbing for HTTP chat backends."""

    name = "http"
    default_base_url = ""

    def __init__(
        self,
        model: str,
        api_key: str = "",
        base_url: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize backend.

        Args:
            model: Model name sent with every request
            api_key: Provider credential (may be empty for local backends)
            base_url: Endpoint override; provider default when empty
            timeout: HTTP timeout in seconds
            transport: Custom httpx transport (e.g. httpx.MockTransport)
        """
        self.model = model
        self._api_key = api_key
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r}, base_url={self.base_url!r})"

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    async def _post(self, path: str, payload: dict[str, Any]) -> Any:
        """POST JSON and return the decoded response body.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx responses
            ValueError: If the body is not JSON
        """
        url = f"{self.base_url}{path}"
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout), transport=self._transport
        ) as client:
            response = await client.post(url, headers=self._headers(), json=payload)
            response.raise_for_status()
            return response.json()


class OpenAIBackend(HTTPChatBackend):
    """OpenAI (and compatible) chat completions API."""

    name = "openai"
    default_base_url = "https://api.openai.com/v1"

    def _headers(self) -> dict[str, str]:
        return {**super()._headers(), "Authorization": f"Bearer {self._api_key}"}

    async def chat(self, system: str, user: str) -> str:
        data = await self._post(
            "/chat/completions",
            {
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            },
        )
        return data["choices"][0]["message"]["content"] or ""


class AnthropicBackend(HTTPChatBackend):
    """Anthropic messages API."""

    name = "anthropic"
    default_base_url = "https://api.anthropic.com"

    def _headers(self) -> dict[str, str]:
        return {
            **super()._headers(),
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    async def chat(self, system: str, user: str) -> str:
        data = await self._post(
            "/v1/messages",
            {
                "model": self.model,
                "max_tokens": ANTHROPIC_MAX_TOKENS,
                "system": system,
                "messages": [{"role": "user", "content": user}],
            },
        )
        return "".join(
            block.get("text", "")
            for block in data.get("content", [])
            if block.get("type") == "text"
        )


class OllamaBackend(HTTPChatBackend):
    """Local Ollama server chat API."""

    name = "ollama"
    default_base_url = "http://localhost:11434"

    async def chat(self, system: str, user: str) -> str:
        data = await self._post(
            "/api/chat",
            {
                "model": self.model,
                "stream": False,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            },
        )
        return data["message"]["content"]


class GeminiBackend(HTTPChatBackend):
    """Google Gemini generateContent API."""

    name = "gemini"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"

    def _headers(self) -> dict[str, str]:
        return {**super()._headers(), "x-goog-api-key": self._api_key}

    async def chat(self, system: str, user: str) -> str:
        data = await self._post(
            f"/models/{self.model}:generateContent",
            {
                "systemInstruction": {"parts": [{"text": system}]},
                "contents": [{"role": "user", "parts": [{"text": user}]}],
            },
        )
        parts = data["candidates"][0]["content"].get("parts", [])
        return "".join(part.get("text", "") for part in parts)


BACKENDS: dict[JudgeBackend, type[HTTPChatBackend]] = {
    JudgeBackend.OPENAI: OpenAIBackend,
    JudgeBackend.ANTHROPIC: AnthropicBackend,
    JudgeBackend.OLLAMA: OllamaBackend,
    JudgeBackend.GEMINI: GeminiBackend,
}


def create_backend(config: JudgeConfig) -> ChatBackend:
    """Build the backend named by config.service.

    Raises:
        ConfigurationError: For unknown backends or a missing API key
    """
    backend = JudgeBackend.parse(config.service)
    if backend.requires_api_key and not config.api_key:
        raise ConfigurationError(
            f"MCP_LINUX_SSH_JUDGE_API_KEY is required for {backend.value}"
        )

    cls = BACKENDS[backend]
    instance = cls(
        model=config.model,
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout_seconds,
    )
    logger.debug("Created judge backend %r", instance)
    return instance
