from functools import lru_cache

from resume_ai.ai.config import load_ai_config
from resume_ai.ai.types import AIAnalysisClient

from resume_ai.ai.providers.openai_provider import OpenAIProvider
from resume_ai.ai.providers.gemini_provider import GeminiProvider


@lru_cache(maxsize=1)
def get_ai_client() -> AIAnalysisClient:
    cfg = load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(cfg)

    if cfg.provider == "gemini":
        return GeminiProvider(cfg)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")


class LazyAIClient:
    """Resolves the configured provider on first use so the app starts without credentials."""

    def analyze(self, text: str, job_description: str | None = None):
        return get_ai_client().analyze(text, job_description)

    def generate_questions(self, text: str, job_description: str | None = None):
        return get_ai_client().generate_questions(text, job_description)
