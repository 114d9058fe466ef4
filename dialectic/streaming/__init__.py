"""Event-stream encoding and parsing."""

from .parser import (
    ChunkCallback,
    StreamError,
    StreamInterruptedError,
    parse_record,
    read_event_stream,
)
from .relay import EVENT_STREAM_MEDIA_TYPE, encode_event, prime_stream, relay_stream

__all__ = [
    "ChunkCallback",
    "StreamError",
    "StreamInterruptedError",
    "parse_record",
    "read_event_stream",
    "EVENT_STREAM_MEDIA_TYPE",
    "encode_event",
    "prime_stream",
    "relay_stream",
]
