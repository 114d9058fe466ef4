"""Actions accepted by the dialogue reducer."""

from dataclasses import dataclass
from typing import Union

from .dialogue import Perspective, Stage


@dataclass(frozen=True)
class SetStage:
    stage: Stage


@dataclass(frozen=True)
class SetUserInput:
    text: str


@dataclass(frozen=True)
class SetPerspectiveA:
    perspective: Perspective


@dataclass(frozen=True)
class SetPerspectiveB:
    perspective: Perspective


@dataclass(frozen=True)
class AddUserMessage:
    text: str


@dataclass(frozen=True)
class AddPerspectiveAMessage:
    text: str


@dataclass(frozen=True)
class AddPerspectiveBMessage:
    text: str


@dataclass(frozen=True)
class SetSynthesis:
    text: str


@dataclass(frozen=True)
class StartProcessing:
    pass


@dataclass(frozen=True)
class StopProcessing:
    pass


@dataclass(frozen=True)
class SetError:
    message: str


@dataclass(frozen=True)
class ClearError:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class SetStreamingResponseA:
    text: str


@dataclass(frozen=True)
class SetStreamingResponseB:
    text: str


@dataclass(frozen=True)
class UpdateStreamingSynthesis:
    """Append a chunk to the synthesis buffer."""

    chunk: str


@dataclass(frozen=True)
class ClearStreamingResponses:
    pass


@dataclass(frozen=True)
class ClearStreamingSynthesis:
    pass


DialogueAction = Union[
    SetStage,
    SetUserInput,
    SetPerspectiveA,
    SetPerspectiveB,
    AddUserMessage,
    AddPerspectiveAMessage,
    AddPerspectiveBMessage,
    SetSynthesis,
    StartProcessing,
    StopProcessing,
    SetError,
    ClearError,
    Reset,
    SetStreamingResponseA,
    SetStreamingResponseB,
    UpdateStreamingSynthesis,
    ClearStreamingResponses,
    ClearStreamingSynthesis,
]
