"""
Core data types for redditx2md.

This module defines the data structures flowing through the pipeline:
- RawPost: A post as returned by the Reddit listing API
- ProcessedPost: A post after cleaning, translation and summarization
- SaveResult: Where the rendered Markdown was written
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


NO_CONTENT_FALLBACK = "(No Content Body)"
NO_SELFTEXT_SUMMARY = "(无正文内容)"
EMPTY_SUMMARY_FALLBACK = "(无内容)"

SUMMARY_SENTINELS = frozenset({NO_SELFTEXT_SUMMARY, EMPTY_SUMMARY_FALLBACK})
BODY_SENTINELS = frozenset({NO_CONTENT_FALLBACK, NO_SELFTEXT_SUMMARY})


@dataclass(frozen=True)
class RawPost:
    """A post from the subreddit top listing, text fields uncleaned.

    Attributes:
        title: Post title
        selftext: Post body (may be empty for link posts)
        url: Source URL
        score: Upvote count
        author: Username
        permalink: Reddit internal path (e.g. "/r/ObsidianMD/comments/...")
    """
    title: str
    selftext: str
    url: str
    score: int
    author: str
    permalink: str

    @classmethod
    def from_listing(cls, data: dict[str, Any]) -> RawPost:
        """Build a RawPost from a listing child's ``data`` mapping."""
        return cls(
            title=_as_str(data.get("title")),
            selftext=_as_str(data.get("selftext")),
            url=_as_str(data.get("url")),
            score=_as_int(data.get("score")),
            author=_as_str(data.get("author")),
            permalink=_as_str(data.get("permalink")),
        )


@dataclass
class ProcessedPost:
    """A post after the processing stage.

    ``title`` and ``selftext`` hold cleaned (and usually translated) text,
    while ``original_title`` and ``original_selftext`` always keep the values
    fetched from Reddit.

    Attributes:
        title: Cleaned/translated title
        selftext: Cleaned/translated body, or NO_CONTENT_FALLBACK
        url: Source URL (preserved)
        score: Upvote count (preserved)
        author: Username (preserved)
        permalink: Reddit internal path (preserved)
        summary: LLM summary, or one of the summary sentinels
        original_title: Title before translation
        original_selftext: Body before translation
    """
    title: str
    selftext: str
    url: str
    score: int
    author: str
    permalink: str
    summary: str = ""
    original_title: str = ""
    original_selftext: str = ""

    @classmethod
    def from_raw(cls, post: RawPost) -> ProcessedPost:
        return cls(
            title=post.title,
            selftext=post.selftext,
            url=post.url,
            score=post.score,
            author=post.author,
            permalink=post.permalink,
            original_title=post.title,
            original_selftext=post.selftext,
        )


@dataclass
class SaveResult:
    """Location and content of a written Markdown report."""
    file_path: Path
    content: str


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
