from pathlib import Path
import re

from redditx2md.core.types import (
    EMPTY_SUMMARY_FALLBACK,
    NO_CONTENT_FALLBACK,
    NO_SELFTEXT_SUMMARY,
    ProcessedPost,
)
from redditx2md.output.renderer import render_markdown, save_markdown


def _sample_post(**overrides) -> ProcessedPost:
    values = dict(
        title="我的 Obsidian 工作流",
        selftext="这是我的工作流。",
        url="https://example.com/post",
        score=42,
        author="obsidian_fan",
        permalink="/r/ObsidianMD/comments/abc123/",
        summary="作者分享了工作流。",
        original_title="My Obsidian Workflow",
        original_selftext="This is my workflow.",
    )
    values.update(overrides)
    return ProcessedPost(**values)


def test_render_markdown_outputs_post_sections() -> None:
    text = render_markdown("ObsidianMD", [_sample_post()])

    assert text.startswith("# r/ObsidianMD 热门帖子 (翻译)\n")
    assert "## [我的 Obsidian 工作流](https://example.com/post)" in text
    assert "**Author:** obsidian_fan | **Score:** 42" in text
    assert "### 摘要\n\n作者分享了工作流。" in text
    assert "### 正文\n\n这是我的工作流。" in text
    assert "> 原标题: My Obsidian Workflow" in text
    assert text.count("---") == 1


def test_render_markdown_keeps_post_order() -> None:
    posts = [_sample_post(title=f"帖子 {n}", original_title=f"Post {n}") for n in range(1, 4)]

    text = render_markdown("ObsidianMD", posts)

    positions = [text.index(f"## [帖子 {n}]") for n in range(1, 4)]
    assert positions == sorted(positions)
    assert text.count("---") == 3


def test_render_markdown_empty_list() -> None:
    text = render_markdown("ObsidianMD", [])

    assert "# r/ObsidianMD 热门帖子 (翻译)" in text
    assert "*No posts found.*" in text
    assert "##" not in text


def test_render_markdown_omits_sentinel_sections() -> None:
    posts = [
        _sample_post(selftext=NO_CONTENT_FALLBACK, summary=NO_SELFTEXT_SUMMARY),
        _sample_post(summary=EMPTY_SUMMARY_FALLBACK),
        _sample_post(summary="", selftext=""),
    ]

    text = render_markdown("ObsidianMD", posts)

    assert "### 摘要" not in text
    assert text.count("### 正文") == 1
    assert NO_CONTENT_FALLBACK not in text
    assert NO_SELFTEXT_SUMMARY not in text


def test_render_markdown_falls_back_to_permalink_and_placeholders() -> None:
    post = _sample_post(url="", title="  ", author="", score=0, original_title="")

    text = render_markdown("ObsidianMD", [post])

    assert "## [(Untitled)](https://www.reddit.com/r/ObsidianMD/comments/abc123/)" in text
    assert "**Author:** [unknown] | **Score:** 0" in text
    assert "原标题" not in text


def test_save_markdown_writes_named_file(tmp_path: Path) -> None:
    output_dir = tmp_path / "nested" / "output"

    result = save_markdown("ObsidianMD", [_sample_post()], output_dir)

    assert result.file_path.parent == output_dir
    assert re.fullmatch(r"ObsidianMD_\d{4}-\d{2}-\d{2}_\d{6}\.md", result.file_path.name)
    assert result.file_path.read_text(encoding="utf-8") == result.content
    assert "> 原标题: My Obsidian Workflow" in result.content
