"""Unit tests for the narrative provider module."""
import json

import httpx
import pytest

from taleweaver.errors import ProviderError
from taleweaver.llm import (
    ChatMessage,
    GroqProvider,
    LLMProvider,
    OpenAIProvider,
    create_llm_provider,
)


def completion_payload(content: str | None = "Once upon a time", choices: bool = True) -> dict:
    """Build a chat completion body as returned by OpenAI-compatible APIs."""
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "llama3-8b-8192",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ] if choices else [],
        "usage": {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17},
    }


def groq_with_transport(handler) -> GroqProvider:
    """Create a Groq provider whose HTTP traffic goes to handler."""
    return GroqProvider(
        api_key="fake-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        max_retries=0,
    )


class TestLLMProviderInterface:
    """Tests for the abstract LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestGroqProvider:
    """Tests for GroqProvider."""

    def test_defaults(self):
        """Test the default endpoint and model."""
        provider = GroqProvider(api_key="fake-key")

        assert provider.model == "llama3-8b-8192"
        assert provider.name == "groq"
        assert str(provider._client.base_url).startswith("https://api.groq.com/openai/v1")

    @pytest.mark.asyncio
    async def test_chat_completion(self):
        """Test the request body and the parsed response."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=completion_payload())

        async with groq_with_transport(handler) as provider:
            response = await provider.chat_completion(
                [ChatMessage(role="user", content="Start a story")]
            )

        assert response.content == "Once upon a time"
        assert response.model == "llama3-8b-8192"
        assert response.usage == {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17}
        assert seen["path"] == "/openai/v1/chat/completions"
        assert seen["auth"] == "Bearer fake-key"
        assert seen["body"]["model"] == "llama3-8b-8192"
        assert seen["body"]["messages"] == [{"role": "user", "content": "Start a story"}]
        assert "max_tokens" not in seen["body"]

    @pytest.mark.asyncio
    async def test_model_override(self):
        """Test that a per-call model replaces the default."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=completion_payload())

        async with groq_with_transport(handler) as provider:
            await provider.chat_completion(
                [ChatMessage(role="user", content="hi")], model="llama-3.1-8b-instant", max_tokens=64
            )

        assert seen["body"]["model"] == "llama-3.1-8b-instant"
        assert seen["body"]["max_tokens"] == 64

    @pytest.mark.asyncio
    async def test_error_status_becomes_provider_error(self):
        """Test that a non-2xx response is reported as ProviderError."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": {"message": "overloaded"}})

        async with groq_with_transport(handler) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.chat_completion([ChatMessage(role="user", content="hi")])

        assert exc_info.value.status_code == 500
        assert exc_info.value.provider == "groq"

    @pytest.mark.asyncio
    async def test_network_error_becomes_provider_error(self):
        """Test that connection failures are reported as ProviderError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with groq_with_transport(handler) as provider:
            with pytest.raises(ProviderError):
                await provider.chat_completion([ChatMessage(role="user", content="hi")])

    @pytest.mark.asyncio
    async def test_missing_choices(self):
        """Test that a completion without choices is a provider error."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=completion_payload(choices=False))

        async with groq_with_transport(handler) as provider:
            with pytest.raises(ProviderError, match="no choices"):
                await provider.chat_completion([ChatMessage(role="user", content="hi")])

    @pytest.mark.asyncio
    async def test_missing_content(self):
        """Test that a message without text is a provider error."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=completion_payload(content=None))

        async with groq_with_transport(handler) as provider:
            with pytest.raises(ProviderError, match="no content"):
                await provider.chat_completion([ChatMessage(role="user", content="hi")])

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_chat_completion_real_api(self, api_keys):
        """Integration test: Generate an opening with the real API."""
        if not api_keys["groq"]:
            pytest.skip("GROQ_API_KEY not set")

        async with GroqProvider(api_key=api_keys["groq"]) as provider:
            response = await provider.chat_completion(
                [ChatMessage(role="user", content="Say one word about dragons.")]
            )

        assert response.content.strip()


class TestLLMFactory:
    """Tests for the narrative provider factory."""

    def test_create_groq(self):
        """Test creating a Groq provider."""
        provider = create_llm_provider("groq", api_key="fake-key")
        assert isinstance(provider, GroqProvider)

    def test_create_openai_case_insensitive(self):
        """Test creating an OpenAI provider with a custom model."""
        provider = create_llm_provider("OpenAI", api_key="fake-key", model="gpt-4o")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o"

    def test_missing_api_key(self):
        """Test that a missing key raises TypeError."""
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider("groq")

    def test_unknown_provider(self):
        """Test that an unknown provider raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("unknown", api_key="fake-key")
