"""Tests for prompt assembly."""

from dialectic.models import PerspectiveType
from dialectic.prompts import (
    SYNTHESIS_PREFIX,
    SYNTHESIS_SYSTEM_PROMPT,
    SYSTEM_PROMPTS,
    build_perspective_messages,
    build_synthesis_messages,
    format_conversation_history,
    interleave_transcript,
)


class TestInterleaveTranscript:
    """Tests for interleave_transcript()."""

    def test_round_robin_skips_missing_entries(self):
        """Test u1, a1, b1, u2, b2 for unequal lists."""
        transcript = interleave_transcript(["u1", "u2"], ["a1"], ["b1", "b2"])

        assert transcript == [
            "User: u1",
            "Supporter: a1",
            "Critic: b1",
            "User: u2",
            "Critic: b2",
        ]

    def test_longest_list_wins(self):
        """Test that a longer persona list is not truncated."""
        transcript = interleave_transcript([], ["a1", "a2"], [])

        assert transcript == ["Supporter: a1", "Supporter: a2"]

    def test_empty(self):
        """Test three empty lists."""
        assert interleave_transcript([], [], []) == []


class TestBuildPerspectiveMessages:
    """Tests for build_perspective_messages()."""

    def test_without_history(self):
        """Test system prompt plus topic only."""
        messages = build_perspective_messages(PerspectiveType.SUPPORTIVE, "Is tea better?")

        assert [m.role for m in messages] == ["system", "user"]
        assert messages[0].content == SYSTEM_PROMPTS[PerspectiveType.SUPPORTIVE]
        assert messages[1].content == (
            "Here is the topic or question I want to explore: Is tea better?"
        )

    def test_empty_history_adds_nothing(self):
        """Test that an empty history list is omitted."""
        messages = build_perspective_messages(PerspectiveType.CRITICAL, "x", [])

        assert len(messages) == 2

    def test_with_history(self):
        """Test that history entries are joined with blank lines."""
        messages = build_perspective_messages(
            PerspectiveType.CRITICAL, "x", ["User (1): a", "Critic (1): b"]
        )

        assert messages[2].to_dict() == {
            "role": "user",
            "content": "Here is the conversation so far: User (1): a\n\nCritic (1): b",
        }


class TestBuildSynthesisMessages:
    """Tests for build_synthesis_messages()."""

    def test_wraps_transcript(self):
        """Test the instruction prompt and transcript layout."""
        messages = build_synthesis_messages(["u1"], ["a1"], ["b1"])

        assert messages[0].content == SYNTHESIS_SYSTEM_PROMPT
        assert messages[1].content == (
            f"{SYNTHESIS_PREFIX}User: u1\n\nSupporter: a1\n\nCritic: b1"
        )


class TestFormatConversationHistory:
    """Tests for format_conversation_history()."""

    def test_grouped_and_numbered(self):
        """Test speaker grouping and 1-based numbering."""
        history = format_conversation_history(["u1", "u2"], ["a1"], ["b1"])

        assert history == [
            "User (1): u1",
            "User (2): u2",
            "Supporter (1): a1",
            "Critic (1): b1",
        ]
