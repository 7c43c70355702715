from typing import Any

import httpx
from pydantic import ValidationError

from ...errors import ProviderError
from ..base import ImageSearchProvider
from ..models import ImageResult, ImageSearchResponse


class UnsplashProvider(ImageSearchProvider):
    """Unsplash photo search provider.

    Hidden design decisions:
    - Endpoint and query parameters (landscape, high content filter)
    - Access key placement (client_id query parameter)
    - JSON payload parsing
    """

    def __init__(
        self,
        access_key: str,
        base_url: str = "https://api.unsplash.com",
        orientation: str = "landscape",
        content_filter: str = "high",
        timeout: float = 10.0,
        **client_kwargs: Any
    ):
        """Initialize Unsplash provider.

        Args:
            access_key: Unsplash application access key
            base_url: API base URL
            orientation: Photo orientation filter
            content_filter: Unsplash content safety level
            timeout: Request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient (e.g. transport)
        """
        self._access_key = access_key
        self._orientation = orientation
        self._content_filter = content_filter
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **client_kwargs)

    @property
    def name(self) -> str:
        return "unsplash"

    async def search(self, query: str, limit: int = 1) -> ImageSearchResponse:
        """Search Unsplash photos.

        Args:
            query: Search text
            limit: Results per page

        Returns:
            ImageSearchResponse with results in Unsplash ranking order

        Raises:
            ProviderError: If the request fails or any result is malformed
        """
        try:
            resp = await self._client.get(
                "/search/photos",
                params={
                    "query": query,
                    "orientation": self._orientation,
                    "content_filter": self._content_filter,
                    "per_page": limit,
                    "client_id": self._access_key,
                },
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                "search request rejected", provider=self.name, status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"search request failed: {e}", provider=self.name) from e
        except ValueError as e:
            raise ProviderError("response is not valid JSON", provider=self.name) from e

        return self._parse(query, data)

    def _parse(self, query: str, data: Any) -> ImageSearchResponse:
        """Convert an Unsplash search payload into an ImageSearchResponse."""
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise ProviderError("payload has no results list", provider=self.name)

        results = []
        for position, item in enumerate(data["results"]):
            # Results keep provider order; any malformed entry fails the search
            if not isinstance(item, dict):
                raise ProviderError(
                    f"result {position} is not an object", provider=self.name
                )
            user = item.get("user")
            try:
                results.append(ImageResult(
                    id=item.get("id"),
                    description=item.get("description") or item.get("alt_description"),
                    urls=item.get("urls"),
                    author=user.get("name") if isinstance(user, dict) else None,
                ))
            except ValidationError as e:
                raise ProviderError(
                    f"result {position} is malformed: {e.error_count()} invalid field(s)",
                    provider=self.name,
                ) from e

        total = data.get("total")
        return ImageSearchResponse(
            query=query,
            results=results,
            total=total if isinstance(total, int) else len(results),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
