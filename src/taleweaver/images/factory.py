from typing import Any

from .base import ImageSearchProvider
from .providers import UnsplashProvider


def create_image_provider(provider: str, **config: Any) -> ImageSearchProvider:
    """Create an image search provider instance.

    Args:
        provider: Provider type ('unsplash')
        **config: Provider-specific configuration
            For Unsplash:
                - access_key: str (required)
                - orientation: str (default: 'landscape')
                - content_filter: str (default: 'high')
                - timeout: float (default: 10.0)

    Returns:
        Initialized image search provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing
    """
    provider_lower = provider.lower()

    if provider_lower == "unsplash":
        if "access_key" not in config:
            raise TypeError("Unsplash provider requires 'access_key' in config")
        return UnsplashProvider(**config)

    raise ValueError(
        f"Unsupported image provider: {provider}. "
        f"Supported providers: 'unsplash'"
    )
