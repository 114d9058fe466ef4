"""HTTP client for the perspective and synthesis endpoints."""

from typing import Protocol

import httpx

from ..logging_config import get_logger
from ..models import PerspectiveType
from ..streaming import (
    ChunkCallback,
    StreamError,
    StreamInterruptedError,
    read_event_stream,
)

logger = get_logger(__name__)

PERSPECTIVE_FALLBACK_ERROR = (
    "Failed to generate AI response. Please check your API key and try again."
)
SYNTHESIS_FALLBACK_ERROR = (
    "Failed to generate synthesis. Please check your API key and try again."
)


class GenerationError(RuntimeError):
    """A generation request failed; the message is safe to show the user."""


class IResponseGenerator(Protocol):
    """Client-side access to persona replies and syntheses."""

    async def generate_perspective_response(
        self,
        perspective: PerspectiveType,
        user_message: str,
        conversation_history: list[str] | None = None,
        on_chunk: ChunkCallback | None = None,
    ) -> str:
        """Stream one persona reply; returns the full text."""
        ...

    async def generate_synthesis(
        self,
        user_messages: list[str],
        perspective_a_messages: list[str],
        perspective_b_messages: list[str],
        on_chunk: ChunkCallback | None = None,
    ) -> str:
        """Stream a synthesis of the whole conversation; returns the full text."""
        ...


class ResponseGenerator:
    """Talks to a running Dialectic API over HTTP."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self._api_url = api_url.rstrip("/")
        self._owns_client = client is None
        if client is None:
            client = (
                httpx.AsyncClient(timeout=timeout)
                if timeout is not None
                else httpx.AsyncClient()
            )
        self._client = client

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def generate_perspective_response(
        self,
        perspective: PerspectiveType,
        user_message: str,
        conversation_history: list[str] | None = None,
        on_chunk: ChunkCallback | None = None,
    ) -> str:
        """Stream one persona reply from ``POST /api/perspective``."""
        body = {
            "perspective": PerspectiveType(perspective).value,
            "userMessage": user_message,
            "conversationHistory": list(conversation_history or []),
            "stream": True,
        }
        return await self._post_streaming(
            "/api/perspective", body, "response", on_chunk, PERSPECTIVE_FALLBACK_ERROR
        )

    async def generate_synthesis(
        self,
        user_messages: list[str],
        perspective_a_messages: list[str],
        perspective_b_messages: list[str],
        on_chunk: ChunkCallback | None = None,
    ) -> str:
        """Stream a synthesis from ``POST /api/synthesis``."""
        body = {
            "userMessages": list(user_messages),
            "perspectiveAMessages": list(perspective_a_messages),
            "perspectiveBMessages": list(perspective_b_messages),
            "stream": True,
        }
        return await self._post_streaming(
            "/api/synthesis", body, "synthesis", on_chunk, SYNTHESIS_FALLBACK_ERROR
        )

    async def _post_streaming(
        self,
        path: str,
        body: dict,
        result_field: str,
        on_chunk: ChunkCallback | None,
        fallback_error: str,
    ) -> str:
        """POST ``body`` and read either an event stream or a JSON result."""
        try:
            async with self._client.stream(
                "POST", f"{self._api_url}{path}", json=body
            ) as response:
                if response.status_code >= 400:
                    await response.aread()
                    message = _error_message(response)
                    logger.error(
                        "Request to %s failed: %s",
                        path,
                        message,
                        extra={"status_code": response.status_code, "path": path},
                    )
                    raise GenerationError(message or fallback_error)

                content_type = response.headers.get("content-type", "")
                if content_type.startswith("text/event-stream"):
                    return await read_event_stream(response.aiter_bytes(), on_chunk)

                # Non-streaming server: the whole text arrives as JSON
                await response.aread()
                text = response.json()[result_field]
                if on_chunk and text:
                    on_chunk(text)
                return text

        except GenerationError:
            raise
        except StreamInterruptedError as e:
            logger.error("Stream from %s was cut off: %s", path, e, extra={"path": path})
            raise GenerationError(fallback_error) from e
        except StreamError as e:
            logger.error("Stream from %s failed: %s", path, e, extra={"path": path})
            raise GenerationError(str(e) or fallback_error) from e
        except Exception as e:
            logger.error("Error calling %s: %s", path, e, exc_info=True, extra={"path": path})
            raise GenerationError(fallback_error) from e


def _error_message(response: httpx.Response) -> str | None:
    """Extract ``{"error": ...}`` from a failed response, if present."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return None
