from abc import ABC, abstractmethod
from typing import Any

from .models import ImageSearchResponse


class ImageSearchProvider(ABC):
    """Abstract base class for illustration search providers.

    This module hides the design decision of where story illustrations come from.

    Hidden design decisions:
    - HTTP client setup and authentication
    - Query parameters (orientation, content filtering)
    - Payload parsing and error mapping
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider identifier used in error messages."""
        pass

    @abstractmethod
    async def search(self, query: str, limit: int = 1) -> ImageSearchResponse:
        """Search for images matching a free-text query.

        Args:
            query: Search text, e.g. "dragon cave treasure"
            limit: Maximum number of results to request

        Returns:
            ImageSearchResponse, possibly with no results

        Raises:
            ProviderError: On network failure, non-success status or a
                malformed payload
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "ImageSearchProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
