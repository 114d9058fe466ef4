"""Core data models for Dialectic."""

from .actions import (
    AddPerspectiveAMessage,
    AddPerspectiveBMessage,
    AddUserMessage,
    ClearError,
    ClearStreamingResponses,
    ClearStreamingSynthesis,
    DialogueAction,
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
from .dialogue import CRITIC, INITIAL_STATE, SUPPORTER, DialogueState, Perspective, Stage
from .messages import ChatMessage, PerspectiveType
from .streaming import StreamChunk

__all__ = [
    # Dialogue
    "Stage",
    "Perspective",
    "DialogueState",
    "INITIAL_STATE",
    "SUPPORTER",
    "CRITIC",
    # Messages
    "ChatMessage",
    "PerspectiveType",
    # Streaming
    "StreamChunk",
    # Actions
    "DialogueAction",
    "SetStage",
    "SetUserInput",
    "SetPerspectiveA",
    "SetPerspectiveB",
    "AddUserMessage",
    "AddPerspectiveAMessage",
    "AddPerspectiveBMessage",
    "SetSynthesis",
    "StartProcessing",
    "StopProcessing",
    "SetError",
    "ClearError",
    "Reset",
    "SetStreamingResponseA",
    "SetStreamingResponseB",
    "UpdateStreamingSynthesis",
    "ClearStreamingResponses",
    "ClearStreamingSynthesis",
]
