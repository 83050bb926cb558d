"""LLM translation/summarization and observability."""

from .providers.base import CompletionProvider
from .providers.deepseek import DeepSeekProvider
from .providers.factory import available_providers, create_provider
from .tracing import setup_langfuse, flush, start_span, set_span_output, record_span_error

__all__ = [
    "CompletionProvider",
    "DeepSeekProvider",
    "create_provider",
    "available_providers",
    "setup_langfuse",
    "flush",
    "start_span",
    "set_span_output",
    "record_span_error",
]
