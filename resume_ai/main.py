import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import sentry_sdk

from resume_ai.api.health import router as health_router
from resume_ai.api.resume import router as resume_router
from resume_ai.core.cors import cors_options
from resume_ai.core.exceptions import request_validation_exception_handler, unhandled_exception_handler
from resume_ai.core.rate_limit import limiter, rate_limit_exceeded_handler
from resume_ai.core.config import settings
from resume_ai.core.lifespan import lifespan

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Resume AI API", version="0.1.0", lifespan=lifespan)

app.add_middleware(CORSMiddleware, **cors_options())
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, tags=["Health"])
app.include_router(resume_router, tags=["Resume"])
