from .unsplash import UnsplashProvider

__all__ = ["UnsplashProvider"]
