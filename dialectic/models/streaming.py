"""Event-stream wire records."""

from dataclasses import dataclass


@dataclass
class StreamChunk:
    """One ``data:`` record exchanged between the API and its clients.

    A record is one of three kinds: an incremental ``content`` fragment, the
    terminal ``done`` record (optionally carrying ``fullContent``), or an
    ``error`` record sent when generation fails after the stream has started.
    """

    content: str = ""
    done: bool = False
    full_content: str | None = None
    error: str | None = None

    def to_payload(self) -> dict:
        """Wire representation with the camelCase field names clients expect."""
        if self.error is not None:
            return {"error": self.error}
        if self.done:
            payload: dict = {"done": True}
            if self.full_content is not None:
                payload["fullContent"] = self.full_content
            return payload
        return {"content": self.content}

    @classmethod
    def from_payload(cls, payload: dict) -> "StreamChunk":
        full_content = payload.get("fullContent")
        error = payload.get("error")
        return cls(
            content=str(payload.get("content") or ""),
            done=bool(payload.get("done", False)),
            full_content=str(full_content) if full_content is not None else None,
            error=str(error) if error is not None else None,
        )
