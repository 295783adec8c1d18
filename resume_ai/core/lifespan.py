from contextlib import asynccontextmanager
import logging

from resume_ai.ai.config import load_ai_config
from resume_ai.core.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    cfg = load_ai_config()
    logger.info(
        "app_startup ai_provider=%s ai_model=%s max_upload_mb=%s scan_min_chars=%s rate_limit_enabled=%s",
        cfg.provider,
        cfg.model,
        settings.max_upload_mb,
        settings.scan_min_chars,
        settings.rate_limit_enabled,
    )
    yield
    logger.info("app_shutdown")
