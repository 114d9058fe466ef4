"""Dialogue-related data models."""

from dataclasses import dataclass, field
from enum import Enum


class Stage(str, Enum):
    """Screens of the conversation, in forward order."""

    WELCOME = "welcome"
    CONVERSATION = "conversation"
    SYNTHESIS = "synthesis"


@dataclass(frozen=True)
class Perspective:
    """One persona: display name, one-line description, completed responses."""

    name: str = ""
    description: str = ""
    messages: tuple[str, ...] = ()


SUPPORTER = Perspective(
    name="Supporter",
    description="Affirms and extends core ideas",
)

CRITIC = Perspective(
    name="Critic",
    description="Challenges assumptions and offers alternatives",
)


@dataclass(frozen=True)
class DialogueState:
    """Whole client-side conversation state; replaced, never mutated."""

    stage: Stage = Stage.WELCOME
    user_input: str = ""
    perspective_a: Perspective = field(default_factory=Perspective)
    perspective_b: Perspective = field(default_factory=Perspective)
    user_messages: tuple[str, ...] = ()
    synthesis: str | None = None
    is_processing: bool = False
    error: str | None = None
    streaming_response_a: str = ""
    streaming_response_b: str = ""
    streaming_synthesis: str = ""


INITIAL_STATE = DialogueState()
