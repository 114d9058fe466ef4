"""Chat messages and persona tags."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal


class PerspectiveType(str, Enum):
    """Persona tag sent on the wire."""

    SUPPORTIVE = "supportive"
    CRITICAL = "critical"


@dataclass
class ChatMessage:
    """A single message handed to a chat provider."""

    role: Literal["system", "user", "assistant"]
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}
