"""
Main pipeline orchestration for redditx2md.

This module coordinates the entire workflow:
1. Fetch top posts from the subreddit listing
2. Clean, translate and summarize posts in rate-limited batches
3. Render the Markdown report and write it to the output directory

Any classified failure aborts the run before the report is written.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from .config import AppConfig
from .core.types import ProcessedPost, SaveResult
from .fetch.reddit import fetch_top_posts
from .llm.providers import create_provider
from .llm.providers.base import CompletionProvider
from .llm.tracing import set_span_output, setup_langfuse, start_span
from .output.renderer import save_markdown
from .processor import process_posts
from .utils.logging import log_event, setup_llm_logger, setup_logging


def run_pipeline(
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
) -> SaveResult:
    """Run the fetch -> process -> render pipeline.

    Args:
        cfg: Application configuration
        show_progress: Whether to display a progress bar
        console: Rich console for output (creates default if None)

    Returns:
        SaveResult with the written report path and its content

    Raises:
        Redditx2mdError: A classified fetch or provider failure
    """
    subreddit = cfg.reddit.subreddit
    output_dir = Path(cfg.output.dir)
    logger = setup_logging(cfg.logging, output_dir)
    llm_logger = setup_llm_logger(cfg.logging, output_dir)
    setup_langfuse(cfg.langfuse)

    provider = _build_provider(cfg, llm_logger)

    with start_span(
        "redditx2md.run",
        kind="chain",
        input_value={"subreddit": subreddit, "output_dir": str(output_dir)},
        attributes={
            "reddit.time_filter": cfg.reddit.time_filter,
            "reddit.limit": cfg.reddit.limit,
            "processing.batch_size": cfg.processing.batch_size,
        },
    ) as run_span:
        log_event(
            logger,
            "Pipeline start",
            event="pipeline_start",
            subreddit=subreddit,
            output=str(output_dir),
            translate=cfg.processing.translate,
        )

        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console or Console(),
            disable=not show_progress,
        )
        with progress:
            processed = asyncio.run(_fetch_and_process(cfg, provider, progress))

        result = save_markdown(subreddit, processed, output_dir)
        log_event(
            logger,
            "Pipeline complete",
            event="pipeline_complete",
            output=str(result.file_path),
            total=len(processed),
        )
        set_span_output(run_span, {"report": str(result.file_path), "total": len(processed)})

    return result


async def _fetch_and_process(
    cfg: AppConfig,
    provider: CompletionProvider | None,
    progress: Progress,
) -> list[ProcessedPost]:
    with start_span("redditx2md.fetch", kind="chain", input_value={"subreddit": cfg.reddit.subreddit}):
        posts = await fetch_top_posts(cfg.reddit.subreddit, cfg.reddit)

    task = progress.add_task("Translate + Summarize", total=len(posts))
    with start_span("redditx2md.process", kind="chain", input_value={"count": len(posts)}):
        return await process_posts(posts, provider, cfg.processing, progress, task)


def _build_provider(cfg: AppConfig, llm_logger) -> CompletionProvider | None:
    """Build the completion provider, or None when translation is disabled.

    Raises:
        ValueError: If the provider is unknown or the API key is missing
    """
    if not cfg.processing.translate:
        return None
    return create_provider(cfg.provider, cfg.logging, llm_logger)
