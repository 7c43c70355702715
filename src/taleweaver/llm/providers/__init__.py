from .groq import GroqProvider
from .openai import OpenAIProvider
from .openai_compatible import OpenAICompatibleProvider

__all__ = ["GroqProvider", "OpenAICompatibleProvider", "OpenAIProvider"]
