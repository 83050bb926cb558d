"""Prompt loading and rendering helpers for LLM providers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(name: str, **values: str) -> str:
    template = _load_template(name)
    return template.format(**values)


def build_translation_prompt(text: str, target_language: str) -> str:
    return _render_template("translate", target_language=target_language, content=text)


def build_summary_prompt(text: str, target_language: str) -> str:
    return _render_template("summarize", target_language=target_language, content=text)
