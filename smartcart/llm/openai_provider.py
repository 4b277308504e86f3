from __future__ import annotations

import logging
import os
from urllib.parse import urlparse

from openai import OpenAI

from smartcart.config import settings
from smartcart.errors import ProviderNotConfigured
from smartcart.llm.provider import MatchingProvider
from smartcart.llm.usage import TokenUsageTracker

_LOGGER = logging.getLogger(__name__)


class OpenAIMatchingProvider(MatchingProvider):
    provider_id = "openai"
    display_name = "OpenAI"

    def __init__(self, usage: TokenUsageTracker | None = None, client: OpenAI | None = None) -> None:
        super().__init__(usage)
        self.model = settings.openai_model
        self.client = client
        if self.client is None and settings.openai_api_key:
            kwargs = {"api_key": settings.openai_api_key, "timeout": settings.request_timeout_seconds}
            if self._is_valid_http_url(settings.openai_base_url):
                kwargs["base_url"] = settings.openai_base_url
            else:
                # Let OpenAI SDK use its default URL when direct API is intended.
                os.environ.pop("OPENAI_BASE_URL", None)
            self.client = OpenAI(**kwargs)

    def is_configured(self) -> bool:
        return self.client is not None

    def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
        operation: str,
    ) -> str:
        if not self.client:
            raise ProviderNotConfigured("OPENAI_API_KEY is not configured.")

        messages = []
        if system_prompt.strip():
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            response_format={"type": "json_object"},
            temperature=temperature,
            max_tokens=max_tokens,
        )
        usage = getattr(response, "usage", None)
        if usage is not None:
            self.usage.record(
                operation,
                getattr(usage, "prompt_tokens", 0) or 0,
                getattr(usage, "completion_tokens", 0) or 0,
            )
        text = (response.choices[0].message.content or "").strip()
        _LOGGER.debug("openai %s raw=%s", operation, text[:500])
        return text

    @staticmethod
    def _is_valid_http_url(value: str) -> bool:
        if not value:
            return False
        parsed = urlparse(value)
        return parsed.scheme in {"http", "https"} and bool(parsed.netloc)
