"""Chat model providers used by the interactive assistant."""

from .base import ModelProvider
from .openai_compatible import OpenAICompatibleProvider

__all__ = [
    "ModelProvider",
    "OpenAICompatibleProvider",
]
