"""Terminal front-end: renders the dialogue store as text."""

import asyncio
import sys
from typing import TextIO

from .client import ResponseGenerator
from .dialogue import DialogueSession, DialogueStore
from .logging_config import get_logger
from .models import (
    ClearStreamingResponses,
    ClearStreamingSynthesis,
    DialogueAction,
    DialogueState,
    SetStreamingResponseA,
    SetStreamingResponseB,
    SetSynthesis,
    Stage,
    UpdateStreamingSynthesis,
)

logger = get_logger(__name__)

SYNTHESIS_COMMAND = "/synthesis"
RESET_COMMAND = "/reset"
QUIT_COMMANDS = ("/quit", "/exit")

HELP_TEXT = (
    f"Commands: {SYNTHESIS_COMMAND} summarise, {RESET_COMMAND} start over, "
    f"{QUIT_COMMANDS[0]} leave"
)


class ConsoleRenderer:
    """Store listener that prints streaming buffers as they grow."""

    def __init__(self, out: TextIO | None = None):
        self._out = out or sys.stdout
        self._printed_a = 0
        self._printed_b = 0
        self._printed_synthesis = 0

    def __call__(self, state: DialogueState, action: DialogueAction) -> None:
        if isinstance(action, SetStreamingResponseA):
            self._printed_a = self._emit(
                state.perspective_a.name, state.streaming_response_a, self._printed_a
            )
        elif isinstance(action, SetStreamingResponseB):
            self._printed_b = self._emit(
                state.perspective_b.name, state.streaming_response_b, self._printed_b
            )
        elif isinstance(action, UpdateStreamingSynthesis):
            self._printed_synthesis = self._emit(
                "Synthesis", state.streaming_synthesis, self._printed_synthesis
            )
        elif isinstance(action, ClearStreamingResponses):
            if self._printed_a or self._printed_b:
                self._write("\n")
            self._printed_a = self._printed_b = 0
        elif isinstance(action, (SetSynthesis, ClearStreamingSynthesis)):
            if self._printed_synthesis:
                self._write("\n")
            self._printed_synthesis = 0

    def _emit(self, speaker: str, text: str, printed: int) -> int:
        """Print the part of ``text`` not yet shown; returns the new count."""
        if printed == 0 and text:
            self._write(f"\n[{speaker}] ")
        if len(text) > printed:
            self._write(text[printed:])
        return len(text)

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()


def print_toast(level: str, message: str) -> None:
    stream = sys.stderr if level == "error" else sys.stdout
    print(f"\n* {message}", file=stream)


async def run_console(api_url: str, timeout: float | None = 60.0) -> None:
    """Read prompts from stdin until the user quits."""
    store = DialogueStore()
    store.subscribe(ConsoleRenderer())
    generator = ResponseGenerator(api_url=api_url, timeout=timeout)
    session = DialogueSession(generator, store=store, notify=print_toast)

    print(f"Dialectic console ({api_url}). {HELP_TEXT}")
    try:
        while True:
            prompt = "\nWhat would you like to explore? " if store.state.stage == Stage.WELCOME else "\nYou: "
            try:
                line = await asyncio.to_thread(input, prompt)
            except EOFError:
                break

            text = line.strip()
            if not text:
                continue
            if text in QUIT_COMMANDS:
                break
            if text == RESET_COMMAND:
                session.reset()
                print("Conversation cleared.")
                continue
            if text == SYNTHESIS_COMMAND:
                if not store.state.user_messages:
                    print("Nothing to summarise yet.")
                    continue
                await session.generate_synthesis()
                continue

            if store.state.stage == Stage.WELCOME:
                await session.start(text)
            else:
                await session.send_message(text)
    finally:
        await generator.aclose()
        logger.info("Console session closed")
