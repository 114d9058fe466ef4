"""Client side of the event stream: ``data:`` records back to text."""

import codecs
import json
from typing import AsyncIterable, Callable

from ..logging_config import get_logger
from ..models import StreamChunk

logger = get_logger(__name__)

ChunkCallback = Callable[[str], None]

RECORD_SEPARATOR = "\n\n"
DATA_PREFIX = "data:"


class StreamError(RuntimeError):
    """The server reported a failure inside the stream."""


class StreamInterruptedError(StreamError):
    """The stream ended before its terminal ``done`` record."""


def parse_record(record: str) -> StreamChunk | None:
    """Decode one blank-line-delimited record.

    Returns None for records without a usable ``data:`` payload.
    """
    data_lines = [
        line[len(DATA_PREFIX):].lstrip(" ")
        for line in record.splitlines()
        if line.startswith(DATA_PREFIX)
    ]
    if not data_lines:
        return None

    try:
        payload = json.loads("\n".join(data_lines))
    except json.JSONDecodeError:
        logger.debug("Skipping malformed record: %r", record[:200])
        return None

    if not isinstance(payload, dict):
        logger.debug("Skipping non-object record: %r", record[:200])
        return None

    return StreamChunk.from_payload(payload)


async def read_event_stream(
    byte_chunks: AsyncIterable[bytes],
    on_chunk: ChunkCallback | None = None,
) -> str:
    """Consume an event stream and return the full generated text.

    Each ``content`` fragment is passed to ``on_chunk`` as it arrives. The
    server's ``fullContent`` wins over the locally accumulated text when the
    ``done`` record carries it.

    Raises:
        StreamError: an ``error`` record arrived.
        StreamInterruptedError: the byte stream ended without ``done``.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""
    accumulated = ""

    def consume(record: str) -> str | None:
        """Apply one record; returns the final text once ``done`` arrives."""
        nonlocal accumulated
        chunk = parse_record(record)
        if chunk is None:
            return None

        if chunk.error is not None:
            raise StreamError(chunk.error)

        if chunk.content:
            accumulated += chunk.content
            if on_chunk:
                on_chunk(chunk.content)
        if chunk.done:
            if chunk.full_content is not None:
                return chunk.full_content
            return accumulated
        return None

    async for raw in byte_chunks:
        buffer += decoder.decode(raw).replace("\r\n", "\n")

        while RECORD_SEPARATOR in buffer:
            record, buffer = buffer.split(RECORD_SEPARATOR, 1)
            result = consume(record)
            if result is not None:
                return result

    # Last record may arrive without its trailing blank line.
    buffer += decoder.decode(b"", final=True).replace("\r\n", "\n")
    if buffer.strip():
        result = consume(buffer)
        if result is not None:
            return result

    raise StreamInterruptedError(
        f"Stream ended without a completion record after {len(accumulated)} chars"
    )
