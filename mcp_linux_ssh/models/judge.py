"""Judge verdict model."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class JudgeVerdict:
    """Decision returned by the policy reviewer."""

    allowed: bool
    reason: str

    @classmethod
    def from_dict(cls, data: Any) -> "JudgeVerdict":
        """Build a verdict from decoded JSON.

        Raises:
            ValueError: If the shape is not {"allowed": bool, "reason": str}
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        allowed = data.get("allowed")
        reason = data.get("reason")
        if not isinstance(allowed, bool):
            raise ValueError("'allowed' must be a boolean")
        if not isinstance(reason, str):
            raise ValueError("'reason' must be a string")
        return cls(allowed=allowed, reason=reason)
