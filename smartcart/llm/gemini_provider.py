from __future__ import annotations

import logging

from google import genai
from google.genai import types

from smartcart.config import settings
from smartcart.errors import ProviderNotConfigured
from smartcart.llm.provider import MatchingProvider
from smartcart.llm.usage import TokenUsageTracker

_LOGGER = logging.getLogger(__name__)


class GeminiMatchingProvider(MatchingProvider):
    provider_id = "gemini"
    display_name = "Google Gemini"

    def __init__(self, usage: TokenUsageTracker | None = None, client: genai.Client | None = None) -> None:
        super().__init__(usage)
        self.model = settings.gemini_model
        self.client = client
        if self.client is None and settings.gemini_api_key:
            self.client = genai.Client(api_key=settings.gemini_api_key)

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
            raise ProviderNotConfigured("GEMINI_API_KEY is not configured.")

        config = types.GenerateContentConfig(
            system_instruction=system_prompt.strip() or None,
            temperature=temperature,
            max_output_tokens=max_tokens,
            response_mime_type="application/json",
        )
        response = self.client.models.generate_content(
            model=self.model,
            contents=user_prompt,
            config=config,
        )
        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            self.usage.record(
                operation,
                getattr(usage, "prompt_token_count", 0) or 0,
                getattr(usage, "candidates_token_count", 0) or 0,
            )
        text = (response.text or "").strip()
        _LOGGER.debug("gemini %s raw=%s", operation, text[:500])
        return text
