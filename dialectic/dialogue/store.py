"""Dialogue state store: one pure reducer and a holder that dispatches into it."""

from dataclasses import replace
from typing import Callable

from ..logging_config import get_logger
from ..models import (
    INITIAL_STATE,
    AddPerspectiveAMessage,
    AddPerspectiveBMessage,
    AddUserMessage,
    ClearError,
    ClearStreamingResponses,
    ClearStreamingSynthesis,
    DialogueAction,
    DialogueState,
    Reset,
    SetError,
    SetPerspectiveA,
    SetPerspectiveB,
    SetStage,
    SetStreamingResponseA,
    SetStreamingResponseB,
    SetSynthesis,
    SetUserInput,
    StartProcessing,
    StopProcessing,
    UpdateStreamingSynthesis,
)

logger = get_logger(__name__)

StateListener = Callable[[DialogueState, DialogueAction], None]


def reduce(state: DialogueState, action: DialogueAction) -> DialogueState:
    """Return the state that follows ``action``. Never mutates ``state``.

    Every action is accepted from every state; anything unrecognised leaves
    the state as it was.
    """
    if isinstance(action, SetStage):
        return replace(state, stage=action.stage)

    if isinstance(action, SetUserInput):
        return replace(state, user_input=action.text)

    if isinstance(action, SetPerspectiveA):
        return replace(state, perspective_a=action.perspective)

    if isinstance(action, SetPerspectiveB):
        return replace(state, perspective_b=action.perspective)

    if isinstance(action, AddUserMessage):
        return replace(state, user_messages=state.user_messages + (action.text,))

    # Completed replies replace whatever was streaming for that persona
    if isinstance(action, AddPerspectiveAMessage):
        perspective = state.perspective_a
        return replace(
            state,
            perspective_a=replace(perspective, messages=perspective.messages + (action.text,)),
            streaming_response_a="",
        )

    if isinstance(action, AddPerspectiveBMessage):
        perspective = state.perspective_b
        return replace(
            state,
            perspective_b=replace(perspective, messages=perspective.messages + (action.text,)),
            streaming_response_b="",
        )

    if isinstance(action, SetSynthesis):
        return replace(state, synthesis=action.text, streaming_synthesis="")

    if isinstance(action, StartProcessing):
        return replace(state, is_processing=True)

    if isinstance(action, StopProcessing):
        return replace(state, is_processing=False)

    if isinstance(action, SetError):
        return replace(state, error=action.message)

    if isinstance(action, ClearError):
        return replace(state, error=None)

    if isinstance(action, SetStreamingResponseA):
        return replace(state, streaming_response_a=action.text)

    if isinstance(action, SetStreamingResponseB):
        return replace(state, streaming_response_b=action.text)

    if isinstance(action, UpdateStreamingSynthesis):
        return replace(state, streaming_synthesis=state.streaming_synthesis + action.chunk)

    if isinstance(action, ClearStreamingResponses):
        return replace(state, streaming_response_a="", streaming_response_b="")

    if isinstance(action, ClearStreamingSynthesis):
        return replace(state, streaming_synthesis="")

    if isinstance(action, Reset):
        return INITIAL_STATE

    logger.warning("Ignoring unknown action %r", action)
    return state


class DialogueStore:
    """Owns the current DialogueState; the only writer is ``dispatch``."""

    def __init__(self, initial_state: DialogueState = INITIAL_STATE):
        self._state = initial_state
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> DialogueState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: DialogueAction) -> DialogueState:
        """Apply ``action`` and notify listeners with the new state."""
        self._state = reduce(self._state, action)

        for listener in list(self._listeners):
            try:
                listener(self._state, action)
            except Exception as e:
                logger.error("Error in state listener: %s", e, exc_info=True)

        return self._state
