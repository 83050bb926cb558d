"""
redditx2md - Reddit top posts to translated Markdown.

This package fetches a subreddit's top posts, cleans their text,
translates and summarizes them with an LLM, and writes a Markdown report.

Main entry point is the CLI via the `redditx2md` command.

Example:
    $ redditx2md --subreddit ObsidianMD --time-filter week -o output/
"""

__all__ = [
    "__version__",
    "clean_content",
    "generate_file_name",
    "process_posts",
    "fetch_top_posts",
    "render_markdown",
]
__version__ = "1.0.0"

from .core.cleaner import clean_content
from .fetch.reddit import fetch_top_posts
from .output.naming import generate_file_name
from .output.renderer import render_markdown
from .processor import process_posts
