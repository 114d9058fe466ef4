"""LLM module."""

from .llm_provider import (
    AnthropicProvider,
    IChatProvider,
    OpenAIProvider,
    create_provider,
    split_system,
)

__all__ = [
    "IChatProvider",
    "AnthropicProvider",
    "OpenAIProvider",
    "create_provider",
    "split_system",
]
