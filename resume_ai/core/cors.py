from __future__ import annotations

from typing import Any

from resume_ai.core.config import settings

# The browser client only issues JSON POSTs, multipart uploads and health GETs.
ALLOWED_METHODS = ("GET", "POST", "OPTIONS")


def cors_options() -> dict[str, Any]:
    origins = list(settings.cors_allowed_origins)
    return {
        "allow_origins": origins,
        # Starlette refuses credentials together with a wildcard origin.
        "allow_credentials": settings.cors_allow_credentials and "*" not in origins,
        "allow_methods": list(ALLOWED_METHODS),
        "allow_headers": ["*"],
    }
