"""Dialogue module."""

from .session import DialogueSession, IDialogueSession
from .store import DialogueStore, reduce

__all__ = ["DialogueSession", "IDialogueSession", "DialogueStore", "reduce"]
