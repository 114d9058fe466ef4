"""Persona prompts and conversation assembly."""

from dataclasses import dataclass

from .models import ChatMessage, PerspectiveType

SYSTEM_PROMPTS: dict[PerspectiveType, str] = {
    PerspectiveType.SUPPORTIVE: """You are a supportive perspective in a dialectical conversation.
Your role is to find merit in the user's ideas, affirm their thinking, and build upon their concepts constructively.
Respond in a thoughtful, encouraging manner that extends and strengthens their position.
Keep your response concise (100-150 words) and focused on advancing understanding.
Always maintain a supportive tone while providing substantive insights.""",
    PerspectiveType.CRITICAL: """You are a critical perspective in a dialectical conversation.
Your role is to thoughtfully challenge the user's ideas by identifying potential weaknesses, assumptions, or alternative viewpoints.
Respond in a respectful, constructive manner that offers valuable counterpoints and alternative frameworks.
Keep your response concise (100-150 words) and focused on deepening understanding through critical analysis.
Always maintain a respectful tone while providing substantive critiques.""",
}

SYNTHESIS_SYSTEM_PROMPT = """You are a dialectical synthesis generator.
Based on the conversation between the user and two perspectives (supportive and critical),
create a synthesis that:
1. Identifies the strongest points made by each perspective
2. Highlights areas of consensus
3. Articulates key remaining questions or tensions
4. Suggests next steps for deeper understanding

Format your response in Markdown with clear sections for each of these components.
Be concise but comprehensive, focusing on the most important insights."""

TOPIC_PREFIX = "Here is the topic or question I want to explore: "
HISTORY_PREFIX = "Here is the conversation so far: "
SYNTHESIS_PREFIX = "Please generate a synthesis of this dialectical conversation:\n\n"

# Transcript speaker labels
USER_LABEL = "User"
SUPPORTER_LABEL = "Supporter"
CRITIC_LABEL = "Critic"


@dataclass(frozen=True)
class GenerationSettings:
    """Sampling parameters for one kind of request."""

    temperature: float
    max_tokens: int


# The critic runs slightly hotter
PERSPECTIVE_SETTINGS: dict[PerspectiveType, GenerationSettings] = {
    PerspectiveType.SUPPORTIVE: GenerationSettings(temperature=0.7, max_tokens=250),
    PerspectiveType.CRITICAL: GenerationSettings(temperature=0.8, max_tokens=250),
}
SYNTHESIS_SETTINGS = GenerationSettings(temperature=0.5, max_tokens=500)


def build_perspective_messages(
    perspective: PerspectiveType,
    user_message: str,
    conversation_history: list[str] | None = None,
) -> list[ChatMessage]:
    """Messages for one persona reply: system prompt, topic, optional history."""
    messages = [
        ChatMessage(role="system", content=SYSTEM_PROMPTS[perspective]),
        ChatMessage(role="user", content=f"{TOPIC_PREFIX}{user_message}"),
    ]

    if conversation_history:
        history = "\n\n".join(conversation_history)
        messages.append(ChatMessage(role="user", content=f"{HISTORY_PREFIX}{history}"))

    return messages


def interleave_transcript(
    user_messages: list[str],
    perspective_a_messages: list[str],
    perspective_b_messages: list[str],
) -> list[str]:
    """Round-robin the three lists into chronological order.

    Runs to the longest list; missing entries are skipped, not padded.
    """
    transcript: list[str] = []
    longest = max(
        len(user_messages), len(perspective_a_messages), len(perspective_b_messages)
    )

    for i in range(longest):
        if i < len(user_messages):
            transcript.append(f"{USER_LABEL}: {user_messages[i]}")
        if i < len(perspective_a_messages):
            transcript.append(f"{SUPPORTER_LABEL}: {perspective_a_messages[i]}")
        if i < len(perspective_b_messages):
            transcript.append(f"{CRITIC_LABEL}: {perspective_b_messages[i]}")

    return transcript


def build_synthesis_messages(
    user_messages: list[str],
    perspective_a_messages: list[str],
    perspective_b_messages: list[str],
) -> list[ChatMessage]:
    """Messages asking for a merged summary of the whole transcript."""
    transcript = interleave_transcript(
        user_messages, perspective_a_messages, perspective_b_messages
    )
    return [
        ChatMessage(role="system", content=SYNTHESIS_SYSTEM_PROMPT),
        ChatMessage(role="user", content=SYNTHESIS_PREFIX + "\n\n".join(transcript)),
    ]


def format_conversation_history(
    user_messages: list[str],
    perspective_a_messages: list[str],
    perspective_b_messages: list[str],
) -> list[str]:
    """Numbered history the client sends with each persona request.

    Grouped by speaker rather than interleaved: all user entries, then all
    supporter entries, then all critic entries.
    """
    return [
        *(f"{USER_LABEL} ({i + 1}): {msg}" for i, msg in enumerate(user_messages)),
        *(
            f"{SUPPORTER_LABEL} ({i + 1}): {msg}"
            for i, msg in enumerate(perspective_a_messages)
        ),
        *(
            f"{CRITIC_LABEL} ({i + 1}): {msg}"
            for i, msg in enumerate(perspective_b_messages)
        ),
    ]
