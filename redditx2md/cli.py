"""
Command-line interface for redditx2md.

Uses Typer to provide a CLI with options for the main configuration
settings. Supports loading .env files for API key configuration.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.markup import escape

from .config import get_api_key, load_config
from .core.errors import ErrorKind, Redditx2mdError
from .llm.tracing import flush
from .runner import run_pipeline

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)

_ERROR_HINTS: dict[ErrorKind, str] = {
    ErrorKind.RATE_LIMIT: "Rate limit exceeded. Wait a few minutes before running again.",
    ErrorKind.FORBIDDEN: "Access forbidden. The subreddit may be private or quarantined.",
    ErrorKind.TIMEOUT: "Request timed out. The API may be slow; try again later.",
    ErrorKind.AUTH_ERROR: "Invalid API key. Check DEEPSEEK_API_KEY.",
}


@app.command()
def run(
    subreddit: str | None = typer.Option(None, "--subreddit", "-s", help="Subreddit to fetch."),
    time_filter: str | None = typer.Option(
        None, "--time-filter", "-t", help="Listing window: hour, day, week, month, year, all."
    ),
    limit: int | None = typer.Option(None, "--limit", "-l", help="Number of posts to fetch."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    batch_size: int | None = typer.Option(
        None, "--batch-size", min=1, help="Posts translated concurrently per batch."
    ),
    batch_delay_ms: int | None = typer.Option(
        None, "--batch-delay-ms", min=0, help="Pause between batches in milliseconds."
    ),
    translate: bool | None = typer.Option(
        None, "--translate/--no-translate", help="Enable or disable translation and summaries."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="DEEPSEEK_API_KEY",
        help="Override provider API key (or set DEEPSEEK_API_KEY / .env).",
    ),
):
    """Fetch top subreddit posts, translate them and write a Markdown report.

    Args:
        subreddit: Subreddit name (default from config: ObsidianMD)
        time_filter: Reddit top listing window
        limit: Number of posts to fetch
        output: Directory for the Markdown report and logs
        config: Optional path to YAML config file
        batch_size: Posts processed concurrently per batch
        batch_delay_ms: Delay between batches
        translate: Whether to call the LLM at all
        progress: Whether to show progress bar
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log file format (jsonl, plain)
        log_file: Enable/disable file logging
        api_key: Override LLM provider API key
    """
    # Load environment variables from .env if available
    load_dotenv()

    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if api_key:
        cfg.provider.api_key = api_key
    if subreddit:
        cfg.reddit.subreddit = subreddit
    if time_filter:
        cfg.reddit.time_filter = time_filter
    if limit is not None:
        cfg.reddit.limit = limit
    if output is not None:
        cfg.output.dir = str(output)
    if batch_size is not None:
        cfg.processing.batch_size = batch_size
    if batch_delay_ms is not None:
        cfg.processing.batch_delay_ms = batch_delay_ms
    if translate is not None:
        cfg.processing.translate = translate
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file

    if cfg.processing.translate and not get_api_key(cfg.provider):
        env_name = cfg.provider.api_key_env
        err_console.print(f"[red]Error:[/red] {env_name} environment variable not set")
        err_console.print(f"Please set: export {env_name}=your_key_here")
        err_console.print(f"Or create a .env file with {env_name}")
        raise typer.Exit(code=1)

    try:
        result = run_pipeline(cfg, show_progress=progress, console=console)
    except Redditx2mdError as exc:
        err_console.print(f"[red]Error:[/red] {escape(exc.message)}")
        hint = _ERROR_HINTS.get(exc.kind)
        if hint:
            err_console.print(hint)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    finally:
        # Flush Langfuse traces before exit
        flush()

    console.print(f"Report generated: {result.file_path} ({len(result.content)} chars)")


if __name__ == "__main__":
    app()
