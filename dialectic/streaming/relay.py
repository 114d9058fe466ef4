"""Server side of the event stream: provider chunks to ``data:`` records."""

import json
from typing import AsyncIterator

from ..logging_config import get_logger
from ..models import StreamChunk

logger = get_logger(__name__)

EVENT_STREAM_MEDIA_TYPE = "text/event-stream"


def encode_event(chunk: StreamChunk) -> str:
    """Frame one record as ``data: <json>`` followed by a blank line."""
    return f"data: {json.dumps(chunk.to_payload(), ensure_ascii=False)}\n\n"


async def prime_stream(chunks: AsyncIterator[str]) -> AsyncIterator[str]:
    """Pull the first chunk now so connection errors surface before the
    response headers go out; returns an iterator over the full stream."""
    try:
        first = await anext(chunks)
    except StopAsyncIteration:
        first = None

    async def _replay() -> AsyncIterator[str]:
        if first is None:
            return
        yield first
        async for chunk in chunks:
            yield chunk

    return _replay()


async def relay_stream(
    chunks: AsyncIterator[str],
    fallback_error: str = "An error occurred while generating the response",
) -> AsyncIterator[str]:
    """Re-emit text chunks as content records, then a terminal done record.

    A failure partway through can no longer change the HTTP status, so it is
    reported as an ``error`` record and the stream ends without ``done``.
    """
    full_content = ""
    try:
        async for content in chunks:
            if not content:
                continue
            full_content += content
            yield encode_event(StreamChunk(content=content))
    except Exception as e:
        logger.error("Stream failed after %d chars: %s", len(full_content), e, exc_info=True)
        yield encode_event(StreamChunk(error=str(e) or fallback_error))
        return

    yield encode_event(StreamChunk(done=True, full_content=full_content))
