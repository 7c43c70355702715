"""Data models for story conversations.

Messages, snapshots and events are immutable; only ConversationState,
which the engine owns exclusively, changes over time.
"""

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Author of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class EnginePhase(str, Enum):
    """Where the engine is in the current turn."""

    IDLE = "idle"
    AWAITING_NARRATIVE = "awaiting_narrative"
    AWAITING_ILLUSTRATION_KEYWORDS = "awaiting_illustration_keywords"
    AWAITING_ILLUSTRATION = "awaiting_illustration"


class EventKind(str, Enum):
    """Kind of notification sent to engine subscribers."""

    STATE_CHANGED = "state_changed"
    TURN_FAILED = "turn_failed"


# Line prefixes used when the transcript is replayed to the narrative provider
_PROMPT_PREFIXES = {
    Sender.USER: "User: ",
    Sender.ASSISTANT: "AI: ",
}


class Message(BaseModel):
    """A single transcript entry.

    Attributes:
        id: Unique identifier assigned at creation
        sender: Who wrote the message
        content: Message text, stored verbatim
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sender: Sender
    content: str

    def to_prompt_line(self) -> str:
        """Render the message as a sender-prefixed prompt line."""
        return _PROMPT_PREFIXES[self.sender] + self.content

    def __str__(self) -> str:
        return self.content


class ConversationSnapshot(BaseModel):
    """Read-only view of a conversation at one point in time."""

    model_config = ConfigDict(frozen=True)

    theme: str
    transcript: tuple[Message, ...] = ()
    pending: bool = False
    illustration_url: str | None = None
    phase: EnginePhase = EnginePhase.IDLE
    started_at: float | None = None


class ConversationEvent(BaseModel):
    """Notification delivered to subscribers after every state change."""

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    snapshot: ConversationSnapshot
    error: str | None = Field(default=None, description="Failure message for turn_failed events")


class ConversationState(BaseModel):
    """Mutable conversation state owned by a single engine."""

    theme: str
    transcript: list[Message] = Field(default_factory=list)
    pending: bool = False
    illustration_url: str | None = None
    phase: EnginePhase = EnginePhase.IDLE
    started_at: float | None = None

    def append(self, message: Message) -> None:
        """Append a message to the transcript."""
        self.transcript.append(message)

    def to_prompt(self) -> str:
        """Serialize the whole transcript for the narrative provider.

        Returns:
            One sender-prefixed line per message, ending with an open "AI:" cue
        """
        lines = [message.to_prompt_line() for message in self.transcript]
        return "\n".join(lines) + "\nAI:"

    def snapshot(self) -> ConversationSnapshot:
        """Take an immutable copy of the current state."""
        return ConversationSnapshot(
            theme=self.theme,
            transcript=tuple(self.transcript),
            pending=self.pending,
            illustration_url=self.illustration_url,
            phase=self.phase,
            started_at=self.started_at,
        )
