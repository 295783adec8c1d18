from fastapi import APIRouter

from resume_ai.core.config import settings

router = APIRouter()


def _health_payload() -> dict[str, str]:
    return {"status": "healthy", "ai_provider": settings.ai_provider}


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return _health_payload()


# Path polled by the web client.
@router.get("/resume/health", include_in_schema=False)
async def resume_health_check():
    return _health_payload()
