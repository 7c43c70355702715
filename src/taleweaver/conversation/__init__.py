"""Conversation module: the interactive story engine and its data models."""

from .engine import INTRO_LABEL, ConversationEngine
from .models import (
    ConversationEvent,
    ConversationSnapshot,
    ConversationState,
    EnginePhase,
    EventKind,
    Message,
    Sender,
)
from .themes import EXAMPLE_THEMES, PREMADE_STORIES, resolve_theme
from .timing import elapsed_since, format_elapsed

__all__ = [
    "ConversationEngine",
    "INTRO_LABEL",
    "ConversationEvent",
    "ConversationSnapshot",
    "ConversationState",
    "EnginePhase",
    "EventKind",
    "Message",
    "Sender",
    "EXAMPLE_THEMES",
    "PREMADE_STORIES",
    "resolve_theme",
    "elapsed_since",
    "format_elapsed",
]
