"""Chat providers backed by the Anthropic and OpenAI APIs."""

from typing import AsyncIterator, Protocol

import anthropic
import openai

from ..config import AIConfig, validate_ai_config
from ..logging_config import get_logger
from ..models import ChatMessage

logger = get_logger(__name__)


class IChatProvider(Protocol):
    """Abstraction for chat completion with streaming."""

    name: str
    model: str

    def stream_chat(
        self,
        messages: list[ChatMessage],
        temperature: float = 0.7,
        max_tokens: int = 200,
    ) -> AsyncIterator[str]:
        """Yield text fragments as the model produces them."""
        ...

    async def complete(
        self,
        messages: list[ChatMessage],
        temperature: float = 0.7,
        max_tokens: int = 200,
    ) -> str:
        """Generate the whole completion in one call."""
        ...

    async def aclose(self) -> None:
        """Release the underlying HTTP client."""
        ...


def split_system(messages: list[ChatMessage]) -> tuple[str, list[dict]]:
    """Separate the system prompt from the conversation turns.

    Anthropic takes the system prompt as its own parameter rather than as
    a message in the list.
    """
    system = next((m.content for m in messages if m.role == "system"), "")
    turns = [m.to_dict() for m in messages if m.role != "system"]
    return system, turns


class AnthropicProvider:
    """Anthropic Claude API provider."""

    name = "Anthropic"

    def __init__(self, api_key: str, model: str):
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.model = model
        self._client = anthropic.AsyncAnthropic(api_key=api_key)

    async def stream_chat(
        self,
        messages: list[ChatMessage],
        temperature: float = 0.7,
        max_tokens: int = 200,
    ) -> AsyncIterator[str]:
        """Stream text deltas from the Messages API."""
        system, turns = split_system(messages)
        try:
            async with self._client.messages.stream(
                model=self.model,
                system=system,
                messages=turns,
                temperature=temperature,
                max_tokens=max_tokens,
            ) as stream:
                async for text in stream.text_stream:
                    if text:
                        yield text
        except Exception as e:
            raise RuntimeError(f"LLM API error: {e}") from e

    async def complete(
        self,
        messages: list[ChatMessage],
        temperature: float = 0.7,
        max_tokens: int = 200,
    ) -> str:
        """Generate completion using Claude API."""
        system, turns = split_system(messages)
        try:
            response = await self._client.messages.create(
                model=self.model,
                system=system,
                messages=turns,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            raise RuntimeError(f"LLM API error: {e}") from e

        return "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )

    async def aclose(self) -> None:
        await self._client.close()


class OpenAIProvider:
    """OpenAI chat completions provider."""

    name = "OpenAI"

    def __init__(self, api_key: str, model: str):
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.model = model
        self._client = openai.AsyncOpenAI(api_key=api_key)

    async def stream_chat(
        self,
        messages: list[ChatMessage],
        temperature: float = 0.7,
        max_tokens: int = 200,
    ) -> AsyncIterator[str]:
        """Stream content deltas from chat completions."""
        try:
            stream = await self._client.chat.completions.create(
                model=self.model,
                messages=[m.to_dict() for m in messages],
                temperature=temperature,
                max_tokens=max_tokens,
                stream=True,
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except Exception as e:
            raise RuntimeError(f"LLM API error: {e}") from e

    async def complete(
        self,
        messages: list[ChatMessage],
        temperature: float = 0.7,
        max_tokens: int = 200,
    ) -> str:
        """Generate completion using chat completions."""
        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=[m.to_dict() for m in messages],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            raise RuntimeError(f"LLM API error: {e}") from e

        return completion.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self._client.close()


def create_provider(config: AIConfig) -> IChatProvider:
    """Build the provider selected by ``config``."""
    error = validate_ai_config(config)
    if error:
        raise ValueError(error)

    if config.provider == "openai":
        provider: IChatProvider = OpenAIProvider(
            api_key=config.openai.api_key, model=config.openai.model
        )
    else:
        provider = AnthropicProvider(
            api_key=config.anthropic.api_key, model=config.anthropic.model
        )

    logger.info(
        "Chat provider created",
        extra={"provider": provider.name, "model": provider.model},
    )
    return provider
