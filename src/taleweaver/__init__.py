"""
Taleweaver: interactive, illustrated story conversations.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .conversation import (
    ConversationEngine,
    ConversationEvent,
    ConversationSnapshot,
    EnginePhase,
    EventKind,
    Message,
    Sender,
    format_elapsed,
)
from .errors import (
    ConversationNotStartedError,
    EngineBusyError,
    EngineDisposedError,
    ProviderError,
    TaleweaverError,
)
from .images import ImageSearchProvider, create_image_provider
from .llm import LLMProvider, create_llm_provider

__all__ = [
    "ConversationEngine",
    "ConversationEvent",
    "ConversationSnapshot",
    "EnginePhase",
    "EventKind",
    "Message",
    "Sender",
    "format_elapsed",
    "ConversationNotStartedError",
    "EngineBusyError",
    "EngineDisposedError",
    "ProviderError",
    "TaleweaverError",
    "ImageSearchProvider",
    "create_image_provider",
    "LLMProvider",
    "create_llm_provider",
]
