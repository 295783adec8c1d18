from __future__ import annotations

import os
from typing import Optional, Sequence

from openai import OpenAI, OpenAIError

from resume_ai.ai.base import JsonAIClient
from resume_ai.ai.config import AIConfig
from resume_ai.ai.types import ChatMessage
from resume_ai.core.errors import ProviderError


class OpenAIProvider(JsonAIClient):
    provider_name = "openai"

    def __init__(
        self,
        config: AIConfig,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = 0.2,
        client: Optional[OpenAI] = None,
    ):
        super().__init__(config)
        self._temperature = temperature
        if client is not None:
            self._client = client
            return

        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise ProviderError("OPENAI_API_KEY is missing", code="provider_not_configured")

        self._client = OpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=config.timeout_s,
            max_retries=config.max_retries,
        )

    def complete_json(self, messages: Sequence[ChatMessage], *, max_output_tokens: int) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=payload,
                temperature=self._temperature,
                response_format={"type": "json_object"},
                max_tokens=max_output_tokens,
            )
        except OpenAIError as exc:
            raise ProviderError(f"OpenAI request failed: {exc}", code="provider_request_failed") from exc
        return response.choices[0].message.content if response.choices else ""
