"""DialogueSession: drives turns and syntheses through the store."""

from typing import Callable, Literal, Protocol

from ..client import GenerationError, IResponseGenerator
from ..logging_config import get_logger
from ..models import (
    CRITIC,
    SUPPORTER,
    AddPerspectiveAMessage,
    AddPerspectiveBMessage,
    AddUserMessage,
    ClearError,
    ClearStreamingResponses,
    ClearStreamingSynthesis,
    DialogueState,
    PerspectiveType,
    Reset,
    SetError,
    SetPerspectiveA,
    SetPerspectiveB,
    SetStage,
    SetStreamingResponseA,
    SetStreamingResponseB,
    SetSynthesis,
    SetUserInput,
    Stage,
    StartProcessing,
    StopProcessing,
    UpdateStreamingSynthesis,
)
from ..prompts import format_conversation_history
from .store import DialogueStore

logger = get_logger(__name__)

ToastLevel = Literal["success", "error"]
Notifier = Callable[[ToastLevel, str], None]

TURN_ERROR = "Failed to generate AI responses. Please check your API key and try again."
SYNTHESIS_ERROR = "Failed to generate synthesis. Please check your API key and try again."
SYNTHESIS_SUCCESS = "Synthesis generated successfully!"


class IDialogueSession(Protocol):
    """User-facing operations of one conversation."""

    async def start(self, prompt: str) -> bool:
        """Open the conversation with the first prompt and run its turn."""
        ...

    async def send_message(self, text: str) -> bool:
        """Run one turn: advocate reply, then skeptic reply."""
        ...

    async def generate_synthesis(self) -> bool:
        """Summarise the conversation so far."""
        ...

    def reset(self) -> bool:
        """Discard the conversation and go back to the welcome stage."""
        ...


def _no_toast(level: ToastLevel, message: str) -> None:
    pass


class DialogueSession:
    """One user's conversation with the two personas."""

    def __init__(
        self,
        generator: IResponseGenerator,
        store: DialogueStore | None = None,
        notify: Notifier | None = None,
    ):
        self._generator = generator
        self._store = store or DialogueStore()
        self._notify = notify or _no_toast
        self._submitting = False

    @property
    def store(self) -> DialogueStore:
        return self._store

    @property
    def state(self) -> DialogueState:
        return self._store.state

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    async def start(self, prompt: str) -> bool:
        """Install both perspectives, enter the conversation, run the first turn."""
        if not prompt.strip() or self._submitting:
            return False
        if self._store.state.stage != Stage.WELCOME:
            logger.warning("start() ignored outside the welcome stage")
            return False

        dispatch = self._store.dispatch
        dispatch(SetPerspectiveA(SUPPORTER))
        dispatch(SetPerspectiveB(CRITIC))
        dispatch(SetStage(Stage.CONVERSATION))

        return await self._run_turn(prompt)

    async def send_message(self, text: str) -> bool:
        """Ignored while a previous turn is still in flight."""
        if not text.strip() or self._submitting:
            return False

        return await self._run_turn(text)

    async def _run_turn(self, text: str) -> bool:
        """Both replies are committed together, or nothing is.

        History is taken before the turn, so it never contains ``text``.
        """
        self._submitting = True
        dispatch = self._store.dispatch
        state = self._store.state
        history = format_conversation_history(
            list(state.user_messages),
            list(state.perspective_a.messages),
            list(state.perspective_b.messages),
        )

        dispatch(ClearError())
        dispatch(SetUserInput(text))
        dispatch(StartProcessing())
        dispatch(ClearStreamingResponses())

        try:
            streamed_a = ""

            def on_chunk_a(chunk: str) -> None:
                nonlocal streamed_a
                streamed_a += chunk
                dispatch(SetStreamingResponseA(streamed_a))

            response_a = await self._generator.generate_perspective_response(
                PerspectiveType.SUPPORTIVE, text, history, on_chunk_a
            )
            # Keep the finished advocate reply visible while the skeptic streams
            dispatch(SetStreamingResponseA(response_a))

            streamed_b = ""

            def on_chunk_b(chunk: str) -> None:
                nonlocal streamed_b
                streamed_b += chunk
                dispatch(SetStreamingResponseB(streamed_b))

            response_b = await self._generator.generate_perspective_response(
                PerspectiveType.CRITICAL, text, history, on_chunk_b
            )

            dispatch(AddUserMessage(text))
            dispatch(AddPerspectiveAMessage(response_a))
            dispatch(AddPerspectiveBMessage(response_b))
            dispatch(SetUserInput(""))
            logger.info("Turn %d completed", len(self._store.state.user_messages))
            return True

        except GenerationError as e:
            logger.error("Error generating responses: %s", e)
            message = str(e) or TURN_ERROR
            self._notify("error", message)
            dispatch(SetError(message))
            return False

        finally:
            self._submitting = False
            dispatch(StopProcessing())
            dispatch(ClearStreamingResponses())

    async def generate_synthesis(self) -> bool:
        """Stream a synthesis of everything committed so far."""
        if self._submitting:
            return False

        self._submitting = True
        dispatch = self._store.dispatch
        state = self._store.state

        dispatch(ClearError())
        dispatch(StartProcessing())
        dispatch(ClearStreamingSynthesis())

        try:
            synthesis = await self._generator.generate_synthesis(
                list(state.user_messages),
                list(state.perspective_a.messages),
                list(state.perspective_b.messages),
                lambda chunk: dispatch(UpdateStreamingSynthesis(chunk)),
            )

            dispatch(SetSynthesis(synthesis))
            dispatch(SetStage(Stage.SYNTHESIS))
            self._notify("success", SYNTHESIS_SUCCESS)
            return True

        except GenerationError as e:
            logger.error("Error generating synthesis: %s", e)
            message = str(e) or SYNTHESIS_ERROR
            self._notify("error", message)
            dispatch(SetError(message))
            dispatch(ClearStreamingSynthesis())
            return False

        finally:
            self._submitting = False
            dispatch(StopProcessing())

    def reset(self) -> bool:
        """Start over. Ignored while a request is in flight."""
        if self._submitting:
            return False

        self._store.dispatch(Reset())
        self._store.dispatch(SetStage(Stage.WELCOME))
        return True
