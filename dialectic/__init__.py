"""Dialectic: supportive and critical perspectives on a user's ideas."""

from .app import Application, IApplication
from .client import GenerationError, IResponseGenerator, ResponseGenerator
from .config import AIConfig, ProviderSettings, get_ai_config, validate_ai_config
from .dialogue import DialogueSession, DialogueStore, IDialogueSession, reduce
from .llm import AnthropicProvider, IChatProvider, OpenAIProvider, create_provider
from .models import (
    CRITIC,
    INITIAL_STATE,
    SUPPORTER,
    ChatMessage,
    DialogueState,
    Perspective,
    PerspectiveType,
    Stage,
    StreamChunk,
)
from .streaming import StreamError, StreamInterruptedError, read_event_stream, relay_stream

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Configuration
    "AIConfig",
    "ProviderSettings",
    "get_ai_config",
    "validate_ai_config",
    # Models
    "Stage",
    "Perspective",
    "DialogueState",
    "INITIAL_STATE",
    "SUPPORTER",
    "CRITIC",
    "ChatMessage",
    "PerspectiveType",
    "StreamChunk",
    # Components
    "IChatProvider",
    "AnthropicProvider",
    "OpenAIProvider",
    "create_provider",
    "DialogueStore",
    "reduce",
    "IDialogueSession",
    "DialogueSession",
    "IResponseGenerator",
    "ResponseGenerator",
    "GenerationError",
    "StreamError",
    "StreamInterruptedError",
    "read_event_stream",
    "relay_stream",
]
