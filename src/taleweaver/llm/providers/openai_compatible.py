from typing import Any

from openai import APIError, APIStatusError, AsyncOpenAI

from ...errors import ProviderError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse


class OpenAICompatibleProvider(LLMProvider):
    """Narrative provider for any OpenAI-compatible chat completions API.

    Hidden design decisions:
    - API client initialization (via the OpenAI SDK)
    - Message format conversion
    - Translation of SDK errors and empty completions into ProviderError
    """

    provider_name = "openai-compatible"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize the provider.

        Args:
            api_key: API key sent as a bearer token
            model: Default model to use
            base_url: API base URL (None uses the SDK default)
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def name(self) -> str:
        return self.provider_name

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion.

        Args:
            messages: Request messages
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional provider-specific parameters

        Returns:
            LLMResponse with generated content

        Raises:
            ProviderError: If the request fails or the completion has no text
        """
        model_to_use = model or self._model

        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": [{"role": msg.role, "content": msg.content} for msg in messages],
            "temperature": temperature,
            **kwargs
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        try:
            completion = await self._client.chat.completions.create(**request_params)
        except APIStatusError as e:
            raise ProviderError(e.message, provider=self.name, status_code=e.status_code) from e
        except APIError as e:
            raise ProviderError(e.message, provider=self.name) from e

        if not completion.choices:
            raise ProviderError("completion has no choices", provider=self.name)
        content = completion.choices[0].message.content
        if content is None:
            raise ProviderError("completion message has no content", provider=self.name)

        usage = None
        if completion.usage:
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens
            }

        return LLMResponse(
            content=content,
            model=completion.model or model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the underlying client.

        Note: Uses the OpenAI SDK's async context manager for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        await self._client.close()
