from dataclasses import dataclass

from resume_ai.core.config import settings

_DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    timeout_s: float
    max_retries: int
    question_count: int
    question_seconds: int


def load_ai_config() -> AIConfig:
    provider = settings.ai_provider
    model = (settings.ai_model or _DEFAULT_MODELS[provider]).strip()
    return AIConfig(
        provider=provider,
        model=model,
        timeout_s=float(settings.ai_timeout_s),
        max_retries=settings.ai_max_retries,
        question_count=settings.interview_question_count,
        question_seconds=settings.interview_question_seconds,
    )
