"""Error taxonomy shared by providers and the conversation engine.

Every provider failure (network error, non-success status, unparseable
payload, missing field) is reported as a single ProviderError; callers do
not distinguish between the causes.
"""


class TaleweaverError(Exception):
    """Base class for taleweaver errors."""


class ProviderError(TaleweaverError):
    """A narrative or image provider call failed."""

    def __init__(self, message: str, provider: str = "unknown", status_code: int | None = None):
        msg = f"{provider} provider error: {message}"
        if status_code is not None:
            msg += f" (status {status_code})"
        super().__init__(msg)
        self.provider = provider
        self.status_code = status_code


class EngineBusyError(TaleweaverError):
    """A narrative request is already in flight for this engine."""

    def __init__(self, message: str = "a story beat is still being generated"):
        super().__init__(f"Engine busy: {message}")


class EngineDisposedError(TaleweaverError):
    """The engine was disposed and accepts no further operations."""

    def __init__(self, message: str = "conversation has ended"):
        super().__init__(f"Engine disposed: {message}")


class ConversationNotStartedError(TaleweaverError):
    """User input arrived before the opening story beat exists."""

    def __init__(self, message: str = "call start() and wait for the opening beat first"):
        super().__init__(f"Conversation not started: {message}")
