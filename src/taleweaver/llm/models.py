from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """Represents a chat message sent to a narrative provider."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")


class LLMResponse(BaseModel):
    """Response from a narrative provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
