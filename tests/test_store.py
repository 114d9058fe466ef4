"""Tests for the dialogue reducer and store."""

from dataclasses import dataclass

import pytest

from dialectic.dialogue import DialogueStore, reduce
from dialectic.models import (
    CRITIC,
    INITIAL_STATE,
    SUPPORTER,
    AddPerspectiveAMessage,
    AddPerspectiveBMessage,
    AddUserMessage,
    ClearError,
    ClearStreamingResponses,
    ClearStreamingSynthesis,
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
    Stage,
    StartProcessing,
    StopProcessing,
    UpdateStreamingSynthesis,
)


def busy_state() -> DialogueState:
    """A state with something in every field."""
    state = INITIAL_STATE
    for action in [
        SetPerspectiveA(SUPPORTER),
        SetPerspectiveB(CRITIC),
        SetStage(Stage.CONVERSATION),
        AddUserMessage("u1"),
        AddPerspectiveAMessage("a1"),
        AddPerspectiveBMessage("b1"),
        SetUserInput("draft"),
        StartProcessing(),
        SetError("oops"),
        SetStreamingResponseA("partial a"),
        SetStreamingResponseB("partial b"),
        UpdateStreamingSynthesis("partial s"),
        SetSynthesis("done"),
        SetStage(Stage.SYNTHESIS),
    ]:
        state = reduce(state, action)
    return state


class TestReduce:
    """Tests for reduce()."""

    def test_set_stage(self):
        """Test stage change."""
        state = reduce(INITIAL_STATE, SetStage(Stage.CONVERSATION))

        assert state.stage == Stage.CONVERSATION

    def test_add_user_message_appends(self):
        """Test that user messages accumulate in order."""
        state = reduce(INITIAL_STATE, AddUserMessage("first"))
        state = reduce(state, AddUserMessage("second"))

        assert state.user_messages == ("first", "second")

    def test_add_perspective_message_clears_its_buffer_only(self):
        """Test that committing A clears buffer A and leaves buffer B."""
        state = reduce(INITIAL_STATE, SetPerspectiveA(SUPPORTER))
        state = reduce(state, SetStreamingResponseA("Hel"))
        state = reduce(state, SetStreamingResponseB("Cri"))

        state = reduce(state, AddPerspectiveAMessage("Hello"))

        assert state.perspective_a.messages == ("Hello",)
        assert state.perspective_a.name == "Supporter"
        assert state.streaming_response_a == ""
        assert state.streaming_response_b == "Cri"

    def test_add_perspective_b_message(self):
        """Test committing B."""
        state = reduce(INITIAL_STATE, SetStreamingResponseB("x"))
        state = reduce(state, AddPerspectiveBMessage("xyz"))

        assert state.perspective_b.messages == ("xyz",)
        assert state.streaming_response_b == ""

    def test_synthesis_buffer_appends_then_clears(self):
        """Test synthesis streaming and commit."""
        state = reduce(INITIAL_STATE, UpdateStreamingSynthesis("## Con"))
        state = reduce(state, UpdateStreamingSynthesis("sensus"))
        assert state.streaming_synthesis == "## Consensus"

        state = reduce(state, SetSynthesis("## Consensus"))
        assert state.synthesis == "## Consensus"
        assert state.streaming_synthesis == ""

    def test_processing_flag(self):
        """Test start/stop processing."""
        state = reduce(INITIAL_STATE, StartProcessing())
        assert state.is_processing is True

        state = reduce(state, StopProcessing())
        assert state.is_processing is False

    def test_error_slot(self):
        """Test set/clear error."""
        state = reduce(INITIAL_STATE, SetError("bad key"))
        assert state.error == "bad key"

        state = reduce(state, ClearError())
        assert state.error is None

    def test_clear_streaming(self):
        """Test the clear actions."""
        state = busy_state()
        state = reduce(state, SetStreamingResponseA("a"))
        state = reduce(state, UpdateStreamingSynthesis("s"))

        cleared = reduce(state, ClearStreamingResponses())
        assert cleared.streaming_response_a == ""
        assert cleared.streaming_response_b == ""
        assert cleared.streaming_synthesis == "s"

        cleared = reduce(cleared, ClearStreamingSynthesis())
        assert cleared.streaming_synthesis == ""

    def test_reduce_does_not_mutate(self):
        """Test that the previous state value is untouched."""
        before = busy_state()
        snapshot = DialogueState(**before.__dict__)

        reduce(before, AddUserMessage("more"))

        assert before == snapshot

    def test_unknown_action_is_noop(self):
        """Test that unrecognised actions leave the state unchanged."""

        @dataclass(frozen=True)
        class Bogus:
            pass

        state = busy_state()
        assert reduce(state, Bogus()) is state

    @pytest.mark.parametrize("state", [INITIAL_STATE, busy_state()])
    def test_reset_returns_initial_state(self, state):
        """Test that reset from any state gives exactly the initial state."""
        once = reduce(state, Reset())
        twice = reduce(once, Reset())

        assert once == INITIAL_STATE
        assert twice == INITIAL_STATE


class TestDialogueStore:
    """Tests for DialogueStore."""

    def test_dispatch_updates_state(self):
        """Test dispatch through the store."""
        store = DialogueStore()

        store.dispatch(AddUserMessage("hi"))

        assert store.state.user_messages == ("hi",)

    def test_listeners_receive_new_state_and_action(self):
        """Test subscription callbacks."""
        store = DialogueStore()
        seen = []
        store.subscribe(lambda state, action: seen.append((state.stage, action)))

        action = SetStage(Stage.CONVERSATION)
        store.dispatch(action)

        assert seen == [(Stage.CONVERSATION, action)]

    def test_unsubscribe(self):
        """Test that unsubscribed listeners stop receiving updates."""
        store = DialogueStore()
        seen = []
        unsubscribe = store.subscribe(lambda state, action: seen.append(action))

        unsubscribe()
        store.dispatch(StartProcessing())

        assert seen == []

    def test_failing_listener_does_not_block_others(self):
        """Test that a raising listener is logged and skipped."""
        store = DialogueStore()
        seen = []

        def broken(state, action):
            raise ValueError("render failed")

        store.subscribe(broken)
        store.subscribe(lambda state, action: seen.append(action))

        store.dispatch(StartProcessing())

        assert store.state.is_processing is True
        assert len(seen) == 1
