from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ..core.types import BODY_SENTINELS, SUMMARY_SENTINELS, ProcessedPost, SaveResult
from .naming import generate_file_name


REDDIT_BASE_URL = "https://www.reddit.com"


def render_markdown(subreddit: str, posts: Sequence[ProcessedPost]) -> str:
    """Render processed posts as a Markdown document."""
    lines = [f"# r/{subreddit} 热门帖子 (翻译)", ""]

    if not posts:
        lines.append("*No posts found.*")
        lines.append("")
        return "\n".join(lines)

    for post in posts:
        title = (post.title or "").strip() or "(Untitled)"
        url = post.url or f"{REDDIT_BASE_URL}{post.permalink}"
        author = post.author or "[unknown]"
        score = post.score or 0

        lines.append(f"## [{title}]({url})")
        lines.append("")
        lines.append(f"**Author:** {author} | **Score:** {score}")
        lines.append("")

        summary = (post.summary or "").strip()
        if summary and summary not in SUMMARY_SENTINELS:
            lines.append("### 摘要")
            lines.append("")
            lines.append(summary)
            lines.append("")

        selftext = (post.selftext or "").strip()
        if selftext and selftext not in BODY_SENTINELS:
            lines.append("### 正文")
            lines.append("")
            lines.append(selftext)
            lines.append("")

        if post.original_title:
            lines.append(f"> 原标题: {post.original_title}")
            lines.append("")

        lines.append("---")
        lines.append("")

    return "\n".join(lines)


def save_markdown(
    subreddit: str,
    posts: Sequence[ProcessedPost],
    output_dir: Path,
) -> SaveResult:
    """Render posts and write them under ``output_dir``.

    The directory is created if missing; the file name comes from
    ``generate_file_name``.
    """
    content = render_markdown(subreddit, posts)
    output_dir.mkdir(parents=True, exist_ok=True)
    file_path = output_dir / generate_file_name(subreddit)
    file_path.write_text(content, encoding="utf-8")
    return SaveResult(file_path=file_path, content=content)
