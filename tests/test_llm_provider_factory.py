"""Tests for hot-swappable LLM provider factory."""

import pytest

from redditx2md.config import LoggingConfig, ProviderConfig
from redditx2md.llm.providers.deepseek import DeepSeekProvider
from redditx2md.llm.providers.factory import available_providers, create_provider


def test_available_providers_contains_expected_backends():
    names = available_providers()
    assert "deepseek" in names
    assert "openai_compatible" in names


def test_create_provider_deepseek():
    provider = create_provider(
        ProviderConfig(name="deepseek", api_key="test-key"),
        LoggingConfig(),
        llm_logger=None,
    )
    assert isinstance(provider, DeepSeekProvider)
    assert provider.api_key == "test-key"


def test_create_provider_openai_compatible_reuses_chat_client():
    provider = create_provider(
        ProviderConfig(
            name="openai-compatible",
            model="qwen-plus",
            api_key="test-key",
            base_url="https://llm.example.com/v1",
        ),
        LoggingConfig(),
        llm_logger=None,
    )
    assert isinstance(provider, DeepSeekProvider)
    assert provider.cfg.model == "qwen-plus"


def test_create_provider_reads_env_key(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_API_KEY", "env-key")

    provider = create_provider(ProviderConfig(), LoggingConfig(), llm_logger=None)

    assert provider.api_key == "env-key"


def test_create_provider_without_key_fails(monkeypatch):
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)

    with pytest.raises(ValueError, match="Missing DeepSeek API key"):
        create_provider(ProviderConfig(), LoggingConfig(), llm_logger=None)


def test_create_provider_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unsupported provider"):
        create_provider(
            ProviderConfig(
                name="unknown-provider",
                model="x",
                api_key="test-key",
                base_url="https://example.com",
            ),
            LoggingConfig(),
            llm_logger=None,
        )
