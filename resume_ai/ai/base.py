from __future__ import annotations

import json
import logging
import time
from typing import Any, Sequence

from pydantic import ValidationError

from resume_ai.ai.config import AIConfig
from resume_ai.ai.prompts import build_analysis_messages, build_question_messages
from resume_ai.ai.types import ChatMessage
from resume_ai.core.errors import ProviderError
from resume_ai.schemas.resume import InterviewQuestion, ResumeAnalysis

logger = logging.getLogger(__name__)


def parse_json_payload(raw: str) -> Any:
    text = (raw or "").strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    text = text.strip()
    if not text:
        raise ProviderError("AI provider returned an empty response.", code="empty_response")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProviderError(f"AI provider returned invalid JSON: {exc.msg}", code="invalid_json") from exc


def coerce_analysis(payload: Any) -> ResumeAnalysis:
    if not isinstance(payload, dict):
        raise ProviderError("AI analysis must be a JSON object.", code="invalid_schema")
    try:
        return ResumeAnalysis.model_validate(payload)
    except ValidationError as exc:
        raise ProviderError(f"AI analysis does not match the expected schema: {exc.error_count()} error(s).", code="invalid_schema") from exc


def coerce_questions(payload: Any, *, default_seconds: int) -> list[InterviewQuestion]:
    items = payload.get("questions") if isinstance(payload, dict) else payload
    if not isinstance(items, list):
        raise ProviderError("AI reply does not contain a question list.", code="invalid_schema")

    questions: list[InterviewQuestion] = []
    for position, item in enumerate(items, start=1):
        if isinstance(item, str):
            item = {"question": item}
        if not isinstance(item, dict):
            raise ProviderError(f"Interview question #{position} is not an object.", code="invalid_schema")
        text = str(item.get("question") or item.get("text") or "").strip()
        if not text:
            raise ProviderError(f"Interview question #{position} has no text.", code="invalid_schema")
        duration = item.get("expectedDuration") or item.get("expected_duration") or item.get("allocatedSeconds")
        try:
            seconds = int(duration) if duration is not None else default_seconds
        except (TypeError, ValueError):
            seconds = default_seconds
        try:
            question_id = int(item.get("id") or position)
        except (TypeError, ValueError):
            question_id = position
        questions.append(
            InterviewQuestion(
                id=question_id if question_id >= 1 else position,
                question=text,
                expected_duration=seconds if seconds >= 1 else default_seconds,
            )
        )
    return questions


class JsonAIClient:
    """Shared analyze/generate flow; providers only implement ``complete_json``."""

    provider_name = "unknown"

    def __init__(self, config: AIConfig):
        self._config = config

    @property
    def model(self) -> str:
        return self._config.model

    def complete_json(self, messages: Sequence[ChatMessage], *, max_output_tokens: int) -> str:
        raise NotImplementedError

    def _run(self, operation: str, messages: Sequence[ChatMessage], *, max_output_tokens: int) -> Any:
        started = time.perf_counter()
        try:
            raw = self.complete_json(messages, max_output_tokens=max_output_tokens)
            payload = parse_json_payload(raw)
        except ProviderError as exc:
            logger.warning(
                "ai_completion_failed provider=%s model=%s operation=%s code=%s latency_ms=%s",
                self.provider_name,
                self.model,
                operation,
                exc.code,
                int((time.perf_counter() - started) * 1000),
            )
            raise
        logger.info(
            "ai_completion_succeeded provider=%s model=%s operation=%s latency_ms=%s",
            self.provider_name,
            self.model,
            operation,
            int((time.perf_counter() - started) * 1000),
        )
        return payload

    def analyze(self, text: str, job_description: str | None = None) -> ResumeAnalysis:
        messages = build_analysis_messages(text, job_description)
        return coerce_analysis(self._run("analyze", messages, max_output_tokens=8192))

    def generate_questions(self, text: str, job_description: str | None = None) -> list[InterviewQuestion]:
        messages = build_question_messages(
            text,
            job_description,
            question_count=self._config.question_count,
            question_seconds=self._config.question_seconds,
        )
        payload = self._run("generate_questions", messages, max_output_tokens=8192)
        return coerce_questions(payload, default_seconds=self._config.question_seconds)
