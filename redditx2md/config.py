"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- RedditConfig: Listing API settings
- ProviderConfig: LLM provider settings
- ProcessingConfig: Translation and batching settings
- OutputConfig: Output directory
- LoggingConfig: Logging behavior
- LangfuseConfig: Langfuse tracing settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml


CUSTOM_USER_AGENT = "redditx2md/1.0 (Content Converter)"


@dataclass
class RedditConfig:
    """Configuration for the Reddit listing API.

    Attributes:
        base_url: Reddit base URL
        subreddit: Subreddit to fetch
        time_filter: Listing window ("hour", "day", "week", "month", "year", "all")
        limit: Number of posts to fetch
        timeout_seconds: HTTP request timeout
        user_agent: User-Agent header sent with every request
        trust_env: Whether to respect system proxy settings
    """

    base_url: str = "https://www.reddit.com"
    subreddit: str = "ObsidianMD"
    time_filter: str = "week"
    limit: int = 10
    timeout_seconds: float = 10.0
    user_agent: str = CUSTOM_USER_AGENT
    trust_env: bool = True


@dataclass
class ProviderConfig:
    """Configuration for the LLM provider.

    Attributes:
        name: Provider name ("deepseek" or "openai_compatible")
        model: Model identifier
        base_url: Base URL of the chat-completions API
        api_key_env: Environment variable name containing the API key
        api_key: Optional inline API key (overrides env var)
        timeout_seconds: HTTP request timeout for one completion
        max_tokens: Maximum tokens per completion
        trust_env: Whether to respect system proxy settings for API requests
    """

    name: str = "deepseek"
    model: str = "deepseek-chat"
    base_url: str = "https://api.deepseek.com/v1"
    api_key_env: str = "DEEPSEEK_API_KEY"
    api_key: str | None = None
    timeout_seconds: float = 60.0
    max_tokens: int = 2000
    trust_env: bool = True


@dataclass
class ProcessingConfig:
    """Configuration for the post processing stage.

    Attributes:
        batch_size: Posts processed concurrently per batch
        batch_delay_ms: Pause between batches, in milliseconds
        translate: Whether to translate and summarize at all
        target_language: Language used in translation/summary prompts
        translate_temperature: Sampling temperature for translation (low for fidelity)
        summarize_temperature: Sampling temperature for summaries
    """

    batch_size: int = 3
    batch_delay_ms: int = 1000
    translate: bool = True
    target_language: str = "中文"
    translate_temperature: float = 0.1
    summarize_temperature: float = 0.5


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        dir: Directory receiving the Markdown report and run logs
    """

    dir: str = "./output"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls_authors")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "run.jsonl"
    llm_log_enabled: bool = True
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "redact_urls_authors"
    llm_log_file: str = "llm.jsonl"


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse tracing.

    Attributes:
        enabled: Whether to enable Langfuse tracing
        public_key: Langfuse public key (optional)
        secret_key: Langfuse secret key (optional)
        host: Langfuse host URL (optional)
        environment: Langfuse environment label (optional)
        release: Langfuse release identifier (optional)
        redaction: Redaction mode for prompt/response payloads
        max_text_chars: Maximum characters for prompt/response payloads
    """

    enabled: bool = False
    public_key: str | None = None
    secret_key: str | None = None
    host: str | None = None
    environment: str | None = None
    release: str | None = None
    redaction: str = "redact_urls_authors"
    max_text_chars: int = 20000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    reddit: RedditConfig = field(default_factory=RedditConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            known = {k: v for k, v in value.items() if k in data[key]}
            data[key].update(known)
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        reddit=RedditConfig(**data["reddit"]),
        provider=ProviderConfig(**data["provider"]),
        processing=ProcessingConfig(**data["processing"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
        langfuse=LangfuseConfig(**data["langfuse"]),
    )


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env)
