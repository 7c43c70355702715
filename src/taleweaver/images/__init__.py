from .base import ImageSearchProvider
from .factory import create_image_provider
from .models import ImageResult, ImageSearchResponse, ImageURLs
from .providers import UnsplashProvider

__all__ = [
    "ImageSearchProvider",
    "create_image_provider",
    "ImageResult",
    "ImageSearchResponse",
    "ImageURLs",
    "UnsplashProvider",
]
