"""Tests for the DeepSeek completion provider."""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
import pytest

from redditx2md.config import LoggingConfig, ProviderConfig
from redditx2md.core.errors import (
    AuthError,
    ErrorKind,
    NetworkError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
)
from redditx2md.llm.providers.deepseek import DeepSeekProvider


def _provider(handler, llm_logger=None) -> DeepSeekProvider:
    return DeepSeekProvider(
        ProviderConfig(),
        "test-key",
        LoggingConfig(),
        llm_logger=llm_logger,
        transport=httpx.MockTransport(handler),
    )


def _completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_complete_posts_chat_request_and_returns_content():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("  你好，世界  "))

    result = asyncio.run(_provider(handler).complete("Hello, world", temperature=0.1))

    assert result == "你好，世界"
    assert seen["url"] == "https://api.deepseek.com/v1/chat/completions"
    assert seen["auth"] == "Bearer test-key"
    assert seen["body"]["model"] == "deepseek-chat"
    assert seen["body"]["temperature"] == 0.1
    assert seen["body"]["max_tokens"] == 2000
    assert seen["body"]["messages"] == [{"role": "user", "content": "Hello, world"}]


@pytest.mark.parametrize(
    ("status", "error_type", "kind"),
    [
        (401, AuthError, ErrorKind.AUTH_ERROR),
        (429, RateLimitError, ErrorKind.RATE_LIMIT),
        (500, ServerError, ErrorKind.SERVER_ERROR),
        (503, ServerError, ErrorKind.SERVER_ERROR),
        (400, NetworkError, ErrorKind.NETWORK_ERROR),
    ],
)
def test_complete_classifies_http_failures(status, error_type, kind):
    provider = _provider(lambda request: httpx.Response(status, json={"error": "x"}))

    with pytest.raises(error_type) as excinfo:
        asyncio.run(provider.complete("prompt"))

    assert excinfo.value.kind is kind
    assert excinfo.value.status_code == status
    assert excinfo.value.source == "deepseek"


def test_complete_classifies_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RequestTimeoutError):
        asyncio.run(_provider(handler).complete("prompt"))


def test_complete_classifies_connection_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    with pytest.raises(NetworkError) as excinfo:
        asyncio.run(_provider(handler).complete("prompt"))

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_complete_rejects_unexpected_payload():
    provider = _provider(lambda request: httpx.Response(200, json={"choices": []}))

    with pytest.raises(NetworkError):
        asyncio.run(provider.complete("prompt"))


def test_complete_writes_redacted_llm_log():
    records: list[logging.LogRecord] = []

    class _ListHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    llm_logger = logging.getLogger("test_deepseek_llm_log")
    llm_logger.setLevel(logging.INFO)
    llm_logger.addHandler(_ListHandler())

    provider = _provider(
        lambda request: httpx.Response(200, json=_completion("see https://example.com")),
        llm_logger=llm_logger,
    )
    asyncio.run(provider.complete("prompt"))

    assert len(records) == 1
    assert records[0].status == "ok"
    assert records[0].raw_response == "see [REDACTED_URL]"


def test_provider_requires_api_key():
    with pytest.raises(ValueError, match="Missing DeepSeek API key"):
        DeepSeekProvider(ProviderConfig(), None, LoggingConfig())
