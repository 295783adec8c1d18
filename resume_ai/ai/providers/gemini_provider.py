from __future__ import annotations

import os
from typing import Optional, Sequence

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from resume_ai.ai.base import JsonAIClient
from resume_ai.ai.config import AIConfig
from resume_ai.ai.types import ChatMessage
from resume_ai.core.errors import ProviderError


def _http_options(config: AIConfig) -> types.HttpOptions:
    # Timeout is in milliseconds; attempts counts the first call.
    return types.HttpOptions(
        timeout=int(config.timeout_s * 1000),
        retry_options=types.HttpRetryOptions(attempts=config.max_retries + 1),
    )


class GeminiProvider(JsonAIClient):
    provider_name = "gemini"

    def __init__(
        self,
        config: AIConfig,
        api_key: Optional[str] = None,
        temperature: float = 0.2,
        client: Optional[genai.Client] = None,
    ):
        super().__init__(config)
        self._temperature = temperature
        if client is not None:
            self._client = client
            return

        key = (api_key or os.getenv("GEMINI_API_KEY") or "").strip()
        if not key:
            raise ProviderError("GEMINI_API_KEY is missing", code="provider_not_configured")

        self._client = genai.Client(
            api_key=key,
            http_options=_http_options(config),
        )

    def complete_json(self, messages: Sequence[ChatMessage], *, max_output_tokens: int) -> str:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        contents = [
            types.Content(
                role="model" if m.role == "assistant" else "user",
                parts=[types.Part.from_text(text=m.content)],
            )
            for m in messages
            if m.role != "system"
        ]
        config = types.GenerateContentConfig(
            system_instruction=system or None,
            temperature=self._temperature,
            max_output_tokens=max_output_tokens,
            response_mime_type="application/json",
        )
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as exc:
            raise ProviderError(f"Gemini request failed: {exc}", code="provider_request_failed") from exc
        return response.text or ""
