from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_credentials: bool
    rate_limit: str
    rate_limit_enabled: bool
    max_upload_mb: int
    scan_min_chars: int
    min_text_chars: int
    max_resume_chars: int
    max_job_description_chars: int
    redact_upstream_errors: bool
    ai_provider: str
    ai_model: str | None
    ai_timeout_s: int
    ai_max_retries: int
    interview_question_count: int
    interview_question_seconds: int

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    max_upload_mb=_get_env_int("MAX_UPLOAD_MB", 10),
    scan_min_chars=_get_env_int("SCAN_MIN_CHARS", 50),
    min_text_chars=_get_env_int("MIN_TEXT_CHARS", 50),
    max_resume_chars=_get_env_int("MAX_RESUME_CHARS", 50000),
    max_job_description_chars=_get_env_int("MAX_JOB_DESCRIPTION_CHARS", 20000),
    redact_upstream_errors=_get_env_bool("REDACT_UPSTREAM_ERRORS", False),
    ai_provider=(_get_env("AI_PROVIDER", "gemini") or "gemini").strip().lower(),
    ai_model=_get_env("AI_MODEL"),
    ai_timeout_s=_get_env_int("AI_TIMEOUT_S", 60),
    ai_max_retries=_get_env_int("AI_MAX_RETRIES", 2),
    interview_question_count=_get_env_int("INTERVIEW_QUESTION_COUNT", 10),
    interview_question_seconds=_get_env_int("INTERVIEW_QUESTION_SECONDS", 120),
)

if settings.ai_provider not in {"gemini", "openai"}:
    raise RuntimeError("AI_PROVIDER must be either 'gemini' or 'openai'.")

for _name in (
    "max_upload_mb",
    "scan_min_chars",
    "min_text_chars",
    "max_resume_chars",
    "max_job_description_chars",
    "interview_question_count",
    "interview_question_seconds",
):
    if getattr(settings, _name) <= 0:
        raise RuntimeError(f"{_name.upper()} must be a positive integer.")
