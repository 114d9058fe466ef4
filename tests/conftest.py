"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dialectic.app import Application  # noqa: E402
from dialectic.config import AIConfig, ProviderSettings  # noqa: E402
from dialectic.dialogue import DialogueSession, DialogueStore  # noqa: E402


class FakeProvider:
    """Chat provider that replays canned chunks and records every call.

    ``error`` is raised once ``fail_after`` chunks have been yielded
    (0 means before the first chunk).
    """

    name = "Fake"
    model = "fake-model"

    def __init__(
        self,
        chunks: list[str] | None = None,
        error: str | None = None,
        fail_after: int = 0,
    ):
        self.chunks = ["Hel", "lo"] if chunks is None else chunks
        self.error = error
        self.fail_after = fail_after
        self.calls: list[dict] = []
        self.closed = False

    async def stream_chat(self, messages, temperature=0.7, max_tokens=200):
        self.calls.append(
            {"messages": messages, "temperature": temperature, "max_tokens": max_tokens}
        )
        for i, chunk in enumerate(self.chunks):
            if self.error is not None and i == self.fail_after:
                raise RuntimeError(self.error)
            yield chunk
        if self.error is not None and self.fail_after >= len(self.chunks):
            raise RuntimeError(self.error)

    async def complete(self, messages, temperature=0.7, max_tokens=200):
        self.calls.append(
            {"messages": messages, "temperature": temperature, "max_tokens": max_tokens}
        )
        if self.error is not None:
            raise RuntimeError(self.error)
        return "".join(self.chunks)

    async def aclose(self):
        self.closed = True


class FakeGenerator:
    """Response generator with scripted replies per persona.

    Each reply is a list of chunks, or an exception to raise.
    """

    def __init__(self, replies=None, synthesis=None):
        self.replies = dict(replies or {})
        self.synthesis = synthesis if synthesis is not None else ["## Synthesis"]
        self.perspective_calls: list[dict] = []
        self.synthesis_calls: list[tuple] = []

    async def generate_perspective_response(
        self, perspective, user_message, conversation_history=None, on_chunk=None
    ):
        self.perspective_calls.append(
            {
                "perspective": perspective,
                "user_message": user_message,
                "conversation_history": list(conversation_history or []),
            }
        )
        reply = self.replies.get(perspective.value, [f"{perspective.value} reply"])
        return self._play(reply, on_chunk)

    async def generate_synthesis(
        self, user_messages, perspective_a_messages, perspective_b_messages, on_chunk=None
    ):
        self.synthesis_calls.append(
            (list(user_messages), list(perspective_a_messages), list(perspective_b_messages))
        )
        return self._play(self.synthesis, on_chunk)

    @staticmethod
    def _play(reply, on_chunk):
        if isinstance(reply, Exception):
            raise reply
        for chunk in reply:
            if on_chunk:
                on_chunk(chunk)
        return "".join(reply)


@pytest.fixture
def ai_config():
    """Anthropic selected, key present."""
    return AIConfig(
        provider="anthropic",
        anthropic=ProviderSettings(api_key="test_key", model="claude-test"),
    )


@pytest.fixture
def fake_provider():
    """Provider streaming "Hel" + "lo"."""
    return FakeProvider()


@pytest_asyncio.fixture
async def application(ai_config, fake_provider):
    """Started Application around the fake provider."""
    app = Application(config=ai_config, provider=fake_provider)
    await app.start()
    yield app
    await app.stop()


def make_api_client(application: Application) -> TestClient:
    from dialectic.api import create_fastapi_app

    return TestClient(create_fastapi_app(application))


@pytest.fixture
def api_client(ai_config, fake_provider):
    """TestClient with lifespan running over the fake provider."""
    app = Application(config=ai_config, provider=fake_provider)
    with make_api_client(app) as client:
        yield client


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def toasts():
    """Collected (level, message) notifications."""
    return []


@pytest.fixture
def session(fake_generator, toasts):
    """DialogueSession over the fake generator."""
    return DialogueSession(
        fake_generator,
        store=DialogueStore(),
        notify=lambda level, message: toasts.append((level, message)),
    )

