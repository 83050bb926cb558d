"""Markdown rendering and report file naming."""

from .naming import generate_file_name
from .renderer import render_markdown, save_markdown

__all__ = [
    "generate_file_name",
    "render_markdown",
    "save_markdown",
]
