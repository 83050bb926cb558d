"""DeepSeek chat-completions provider."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import LoggingConfig, ProviderConfig
from ...core.errors import (
    AuthError,
    NetworkError,
    RateLimitError,
    Redditx2mdError,
    RequestTimeoutError,
    ServerError,
)
from ...utils.logging import log_event, redact_text, truncate_text
from ..tracing import record_span_error, set_span_output, start_span
from .base import CompletionProvider


logger = logging.getLogger(__name__)


class DeepSeekProvider(CompletionProvider):
    """Client for an OpenAI-style ``/chat/completions`` endpoint.

    Defaults target DeepSeek; any compatible endpoint works by changing
    ``base_url`` and ``model``.
    """

    source = "deepseek"

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        log_cfg: LoggingConfig,
        llm_logger: logging.Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise ValueError("Missing DeepSeek API key")
        self.cfg = cfg
        self.api_key = api_key
        self.log_cfg = log_cfg
        self.llm_logger = llm_logger
        self.transport = transport

    async def complete(
        self,
        prompt: str,
        temperature: float = 0.3,
        max_tokens: int | None = None,
    ) -> str:
        payload = {
            "model": self.cfg.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens or self.cfg.max_tokens,
        }
        with start_span(
            f"{self.source}.complete",
            kind="llm",
            input_value=prompt,
            attributes={
                "llm.model": self.cfg.model,
                "llm.provider": self.source,
                "llm.temperature": temperature,
            },
        ) as span:
            try:
                data = await self._post(payload)
                content = _extract_text(data)
            except Redditx2mdError as exc:
                record_span_error(span, exc)
                self._log_llm_response(
                    status=exc.kind.value,
                    content=exc.message,
                    prompt=prompt,
                    temperature=temperature,
                )
                raise
            set_span_output(span, content)
            self._log_llm_response(
                status="ok",
                content=content,
                prompt=prompt,
                temperature=temperature,
            )
            return content

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.cfg.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.cfg.timeout_seconds,
                trust_env=self.cfg.trust_env,
                transport=self.transport,
            ) as client:
                resp = await client.post(url, json=payload, headers=headers)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as exc:
            raise self._classify_status(exc) from exc
        except httpx.TimeoutException as exc:
            raise self._logged(
                RequestTimeoutError(
                    "DeepSeek API: Request timeout",
                    cause=exc,
                    source=self.source,
                )
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise self._logged(
                NetworkError(
                    "DeepSeek API: Network error - unable to reach API",
                    cause=exc,
                    source=self.source,
                )
            ) from exc

    def _classify_status(self, exc: httpx.HTTPStatusError) -> Redditx2mdError:
        status_code = exc.response.status_code
        if status_code == 401:
            error: Redditx2mdError = AuthError(
                "DeepSeek API: Invalid API Key",
                cause=exc,
                status_code=status_code,
                source=self.source,
            )
        elif status_code == 429:
            error = RateLimitError(
                "DeepSeek API: Rate Limit exceeded",
                cause=exc,
                status_code=status_code,
                source=self.source,
            )
        elif status_code >= 500:
            error = ServerError(
                f"DeepSeek API: Server error ({status_code})",
                cause=exc,
                status_code=status_code,
                source=self.source,
            )
        else:
            error = NetworkError(
                f"DeepSeek API: Request failed ({status_code})",
                cause=exc,
                status_code=status_code,
                source=self.source,
            )
        return self._logged(error)

    def _logged(self, error: Redditx2mdError) -> Redditx2mdError:
        log_event(
            logger,
            error.message,
            level=logging.ERROR,
            event="llm_failed",
            error_kind=error.kind.value,
            status_code=error.status_code,
        )
        return error

    def _log_llm_response(
        self,
        status: str,
        content: str,
        prompt: str,
        temperature: float,
    ) -> None:
        if self.llm_logger is None:
            return
        detail = self.log_cfg.llm_log_detail
        redaction = self.log_cfg.llm_log_redaction
        payload = {
            "event": "llm_response",
            "status": status,
            "model": self.cfg.model,
            "temperature": temperature,
        }
        if detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        payload["raw_response"] = truncate_text(redact_text(content, redaction))
        log_event(self.llm_logger, "LLM response", **payload)


def _extract_text(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise NetworkError(
            "DeepSeek API: Unexpected response format",
            cause=exc,
            source=DeepSeekProvider.source,
        ) from exc
    return str(content or "").strip()
