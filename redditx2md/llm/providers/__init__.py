"""LLM provider implementations for translation and summarization."""

from .base import CompletionProvider
from .deepseek import DeepSeekProvider
from .factory import available_providers, create_provider

__all__ = [
    "CompletionProvider",
    "DeepSeekProvider",
    "create_provider",
    "available_providers",
]
