"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from taleweaver.errors import ProviderError
from taleweaver.images import ImageResult, ImageSearchProvider, ImageSearchResponse, ImageURLs
from taleweaver.llm import ChatMessage, LLMProvider, LLMResponse
from taleweaver.prompts import clear_cache


class FakeLLMProvider(LLMProvider):
    """Narrative provider answering from a scripted list.

    Each entry is a string, an exception to raise, or an asyncio.Future
    resolving to either.
    """

    def __init__(self, responses: list[Any] | None = None):
        self.responses = list(responses or [])
        self.requests: list[list[ChatMessage]] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    @property
    def prompts(self) -> list[str]:
        """Text of the single user message sent with each request."""
        return [messages[0].content for messages in self.requests]

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.requests.append(messages)
        if not self.responses:
            raise ProviderError("no scripted response left", provider=self.name)
        item = self.responses.pop(0)
        if isinstance(item, asyncio.Future):
            item = await item
        if isinstance(item, Exception):
            raise item
        return LLMResponse(content=item, model=model or "fake-model")

    async def close(self) -> None:
        self.closed = True


class FakeImageProvider(ImageSearchProvider):
    """Image provider answering from a scripted list (like FakeLLMProvider)."""

    def __init__(self, responses: list[Any] | None = None):
        self.responses = list(responses or [])
        self.queries: list[str] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake-images"

    async def search(self, query: str, limit: int = 1) -> ImageSearchResponse:
        self.queries.append(query)
        if not self.responses:
            return ImageSearchResponse(query=query)
        item = self.responses.pop(0)
        if isinstance(item, asyncio.Future):
            item = await item
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


def image_response(*urls: str, query: str = "query") -> ImageSearchResponse:
    """Build a search response whose results carry the given regular URLs."""
    return ImageSearchResponse(
        query=query,
        results=[ImageResult(id=str(i), urls=ImageURLs(regular=url)) for i, url in enumerate(urls)],
        total=len(urls),
    )


async def settle(predicate, max_rounds: int = 100) -> None:
    """Yield to the event loop until predicate() holds."""
    for _ in range(max_rounds):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


@pytest.fixture(autouse=True)
def fresh_prompts():
    """Make every test read prompt templates from disk again."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "groq": os.getenv("GROQ_API_KEY"),
        "unsplash": os.getenv("UNSPLASH_ACCESS_KEY"),
    }


@pytest.fixture
def theme():
    """Return a sample story theme."""
    return "A brave mouse explores a castle"
