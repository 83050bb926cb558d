"""
Post processing: cleaning, translation and summarization.

Posts are processed in fixed-size batches. Posts inside a batch run
concurrently; batches run one after another with a fixed pause in between
to stay under the provider's rate limit. A failure in any post fails the
whole run and later batches are never started.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from rich.progress import Progress

from .config import ProcessingConfig
from .core.cleaner import clean_content
from .core.types import (
    EMPTY_SUMMARY_FALLBACK,
    NO_CONTENT_FALLBACK,
    NO_SELFTEXT_SUMMARY,
    ProcessedPost,
    RawPost,
)
from .llm.prompts import build_summary_prompt, build_translation_prompt
from .llm.providers.base import CompletionProvider
from .utils.logging import log_event


logger = logging.getLogger(__name__)


async def translate_text(text: str, provider: CompletionProvider, cfg: ProcessingConfig) -> str:
    """Translate text into the configured target language.

    Blank text is returned unchanged without calling the provider.
    """
    if not text or not text.strip():
        return text
    prompt = build_translation_prompt(text, cfg.target_language)
    return await provider.complete(prompt, temperature=cfg.translate_temperature)


async def summarize_text(text: str, provider: CompletionProvider, cfg: ProcessingConfig) -> str:
    """Summarize text in 2-3 sentences in the configured target language.

    Blank text yields EMPTY_SUMMARY_FALLBACK without calling the provider.
    """
    if not text or not text.strip():
        return EMPTY_SUMMARY_FALLBACK
    prompt = build_summary_prompt(text, cfg.target_language)
    return await provider.complete(prompt, temperature=cfg.summarize_temperature)


async def process_post(
    post: RawPost,
    provider: CompletionProvider | None,
    cfg: ProcessingConfig,
) -> ProcessedPost:
    """Clean, translate and summarize a single post.

    Args:
        post: Post as fetched from Reddit
        provider: Completion provider; may be None when translation is disabled
        cfg: Processing settings

    Returns:
        A new ProcessedPost; ``original_title``/``original_selftext`` keep the
        fetched values.
    """
    result = ProcessedPost.from_raw(post)
    log_event(logger, f"Processing: {post.title[:50]}", level=logging.DEBUG, event="post_start")

    if post.title and post.title.strip():
        title = clean_content(post.title)
        result.title = await translate_text(title, provider, cfg) if cfg.translate else title

    if post.selftext and post.selftext.strip():
        body = clean_content(post.selftext)
        if cfg.translate:
            result.selftext = await translate_text(body, provider, cfg)
            result.summary = await summarize_text(body, provider, cfg)
        else:
            result.selftext = body
            result.summary = EMPTY_SUMMARY_FALLBACK
    else:
        result.selftext = NO_CONTENT_FALLBACK
        result.summary = NO_SELFTEXT_SUMMARY

    return result


async def process_posts(
    posts: Sequence[RawPost],
    provider: CompletionProvider | None,
    cfg: ProcessingConfig,
    progress: Progress | None = None,
    task: int | None = None,
) -> list[ProcessedPost]:
    """Process posts in sequential batches of concurrent work.

    Args:
        posts: Posts to process, in output order
        provider: Completion provider shared by every post
        cfg: Processing settings (batch size, delay, translation switch)
        progress: Optional Rich progress bar
        task: Task ID for progress updates

    Returns:
        Processed posts in the same order as ``posts``.

    Raises:
        ValueError: If ``cfg.batch_size`` is smaller than 1, or translation
            is enabled without a provider
        Redditx2mdError: The first provider failure in a batch
    """
    batch_size = int(cfg.batch_size)
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {cfg.batch_size}")
    if cfg.translate and provider is None:
        raise ValueError("provider is required when translation is enabled")

    total = len(posts)
    batch_count = (total + batch_size - 1) // batch_size
    results: list[ProcessedPost] = []

    for index, start in enumerate(range(0, total, batch_size), start=1):
        end = min(start + batch_size, total)
        batch = posts[start:end]
        log_event(
            logger,
            f"Processing batch {index}/{batch_count} (posts {start + 1}-{end})",
            event="batch_start",
            batch=index,
            batch_count=batch_count,
        )

        # gather() keeps input order; the first failure propagates and
        # siblings already running are left to finish on their own.
        batch_results = await asyncio.gather(
            *(process_post(post, provider, cfg) for post in batch)
        )
        results.extend(batch_results)
        if progress is not None and task is not None:
            progress.advance(task, len(batch_results))

        if end < total:
            log_event(
                logger,
                f"Waiting {cfg.batch_delay_ms}ms to avoid rate limit",
                event="batch_wait",
                delay_ms=cfg.batch_delay_ms,
            )
            await _pause(cfg.batch_delay_ms)

    return results


async def _pause(delay_ms: int) -> None:
    await asyncio.sleep(max(0, delay_ms) / 1000)
