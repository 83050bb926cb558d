"""End-to-end pipeline tests with fetch and provider stubbed out."""

from __future__ import annotations

from pathlib import Path

import pytest

from redditx2md import processor, runner
from redditx2md.config import AppConfig
from redditx2md.core.errors import RateLimitError
from redditx2md.core.types import RawPost
from redditx2md.llm.providers.base import CompletionProvider


class _EchoProvider(CompletionProvider):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.prompts: list[str] = []

    async def complete(self, prompt, temperature=0.3, max_tokens=None):
        self.prompts.append(prompt)
        if self.fail:
            raise RateLimitError("DeepSeek API: Rate Limit exceeded", status_code=429, source="deepseek")
        content = prompt.split("\n\n", 1)[-1]
        if "总结" in prompt:
            return f"摘要:{content}"
        return f"译:{content}"


def _cfg(tmp_path: Path, **processing) -> AppConfig:
    cfg = AppConfig()
    cfg.output.dir = str(tmp_path / "out")
    cfg.logging.console = False
    cfg.provider.api_key = "test-key"
    for key, value in processing.items():
        setattr(cfg.processing, key, value)
    return cfg


def _posts() -> list[RawPost]:
    return [
        RawPost(
            title="Show &amp; Tell",
            selftext="My &quot;workflow&quot;\n\n\n\nDone",
            url="https://example.com/1",
            score=42,
            author="alice",
            permalink="/r/ObsidianMD/comments/1/",
        ),
        RawPost(
            title="Link post",
            selftext="",
            url="",
            score=7,
            author="bob",
            permalink="/r/ObsidianMD/comments/2/",
        ),
    ]


@pytest.fixture(autouse=True)
def _no_pause(monkeypatch):
    async def fake_pause(delay_ms):
        return None

    monkeypatch.setattr(processor, "_pause", fake_pause)


def _stub_fetch(monkeypatch, posts: list[RawPost]) -> dict:
    seen: dict = {}

    async def fake_fetch(subreddit, cfg, transport=None):
        seen["subreddit"] = subreddit
        return posts

    monkeypatch.setattr(runner, "fetch_top_posts", fake_fetch)
    return seen


def test_run_pipeline_writes_translated_report(monkeypatch, tmp_path: Path):
    seen = _stub_fetch(monkeypatch, _posts())
    provider = _EchoProvider()
    monkeypatch.setattr(runner, "create_provider", lambda *args, **kwargs: provider)

    result = runner.run_pipeline(_cfg(tmp_path), show_progress=False)

    assert seen["subreddit"] == "ObsidianMD"
    assert result.file_path.exists()
    assert result.file_path.parent == tmp_path / "out"
    text = result.file_path.read_text(encoding="utf-8")
    assert text == result.content
    assert "## [译:Show & Tell](https://example.com/1)" in text
    assert '### 摘要\n\n摘要:My "workflow"\n\nDone' in text
    assert "> 原标题: Show &amp; Tell" in text
    assert "## [译:Link post](https://www.reddit.com/r/ObsidianMD/comments/2/)" in text
    assert text.index("Show & Tell") < text.index("Link post")
    assert len(provider.prompts) == 4
    assert (tmp_path / "out" / "run.jsonl").exists()


def test_run_pipeline_failure_writes_no_report(monkeypatch, tmp_path: Path):
    _stub_fetch(monkeypatch, _posts())
    monkeypatch.setattr(runner, "create_provider", lambda *args, **kwargs: _EchoProvider(fail=True))

    with pytest.raises(RateLimitError):
        runner.run_pipeline(_cfg(tmp_path), show_progress=False)

    assert list((tmp_path / "out").glob("*.md")) == []


def test_run_pipeline_without_translation_skips_provider(monkeypatch, tmp_path: Path):
    _stub_fetch(monkeypatch, _posts())

    def fail_create(*args, **kwargs):
        raise AssertionError("provider should not be created")

    monkeypatch.setattr(runner, "create_provider", fail_create)

    result = runner.run_pipeline(_cfg(tmp_path, translate=False), show_progress=False)

    assert "## [Show & Tell](https://example.com/1)" in result.content
    assert '### 正文\n\nMy "workflow"\n\nDone' in result.content
    assert "### 摘要" not in result.content


def test_run_pipeline_empty_listing(monkeypatch, tmp_path: Path):
    _stub_fetch(monkeypatch, [])
    monkeypatch.setattr(runner, "create_provider", lambda *args, **kwargs: _EchoProvider())

    result = runner.run_pipeline(_cfg(tmp_path), show_progress=False)

    assert "*No posts found.*" in result.content
