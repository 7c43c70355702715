from typing import Any

from .openai_compatible import OpenAICompatibleProvider


class GroqProvider(OpenAICompatibleProvider):
    """Groq narrative provider using its OpenAI-compatible API.

    Hidden design decisions:
    - Groq endpoint location
    - Default story model
    """

    provider_name = "groq"

    def __init__(
        self,
        api_key: str,
        model: str = "llama3-8b-8192",
        base_url: str = "https://api.groq.com/openai/v1",
        **client_kwargs: Any
    ):
        """Initialize Groq provider.

        Args:
            api_key: Groq API key
            model: Default model to use
            base_url: Groq API base URL (default: https://api.groq.com/openai/v1)
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__(api_key=api_key, model=model, base_url=base_url, **client_kwargs)
