"""Protocol interfaces for dependency inversion.

Defines the capability the security judge depends on, so any reviewer
backend (or a test double) can be plugged in.

Usage Example:

    from mcp_linux_ssh.protocols import ChatBackend

    class StaticBackend:
        async def chat(self, system: str, user: str) -> str:
            return '{"allowed": true, "reason": "ok"}'

    isinstance(StaticBackend(), ChatBackend)  # True
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ChatBackend(Protocol):
    """A chat-completion service that answers one prompt with text.

    Implementations are constructed once at startup and must not mutate
    their own state afterwards, so one instance can serve concurrent calls.
    """

    name: str

    async def chat(self, system: str, user: str) -> str:
        """Send a system + user message pair and return the reply text.

        Args:
            system: System instruction
            user: User message

        Returns:
            Concatenated text of the model's reply

        Raises:
            Exception: Any transport or API failure
        """
        ...
