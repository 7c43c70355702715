from typing import Any

from .openai_compatible import OpenAICompatibleProvider


class OpenAIProvider(OpenAICompatibleProvider):
    """OpenAI narrative provider."""

    provider_name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__(
            api_key=api_key,
            model=model,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )
