"""Abstract interface for text-completion providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CompletionProvider(ABC):
    """Provider interface used for translation and summarization.

    Implementations must be safe to call concurrently from several
    coroutines: the processing stage shares one instance across a batch.
    """

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        temperature: float = 0.3,
        max_tokens: int | None = None,
    ) -> str:
        """Send a single-turn prompt and return the generated text.

        Raises:
            Redditx2mdError: A classified provider failure
        """
        raise NotImplementedError
