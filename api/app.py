"""
Banking SEO Studio API

FastAPI application serving the dashboard:
1. Runs audits through the selected model provider
2. Answers assistant turns about a generation
3. Keeps the local generation archive
"""

import logging
import sys
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from seo_studio import __version__
from seo_studio.errors import (
    AuditError,
    AuditFailureError,
    AuditTimeoutError,
    InputValidationError,
    ProviderConfigError,
    ProviderError,
    RateLimitError,
    describe_error,
    describe_unexpected_error,
)
from seo_studio.utils.config import get_settings

from . import chat, generate, history, profiles

settings = get_settings()

# Configure logging to stdout
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

app = FastAPI(
    title="Banking SEO Studio",
    description="SEO metadata and banking schema generation for Emirates NBD and Emirates Islamic",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(generate.router)
app.include_router(chat.router)
app.include_router(history.router)
app.include_router(profiles.router)


# ============================================================================
# ERROR HANDLING
# ============================================================================

STATUS_BY_ERROR = (
    (InputValidationError, 400),
    (RateLimitError, 429),
    (AuditTimeoutError, 504),
    (ProviderConfigError, 503),
    (AuditFailureError, 502),
)


def status_for(exc: AuditError) -> int:
    for error_class, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return status_code
    if isinstance(exc, ProviderError) and exc.status_code:
        return exc.status_code
    return 500


@app.exception_handler(AuditError)
async def audit_error_handler(request: Request, exc: AuditError):
    """Render every audit failure as {error, code, type}."""
    status_code = status_for(exc)
    report = describe_error(exc)

    if status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.url.path} rejected: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={"error": report.message, "code": status_code, "type": report.type},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    """Render any other failure in the same {error, code, type} shape."""
    report = describe_unexpected_error(exc)
    status_code = 429 if report.type == "limit" else 500

    logger.error(f"{request.url.path} failed unexpectedly: {type(exc).__name__}", exc_info=exc)

    return JSONResponse(
        status_code=status_code,
        content={"error": report.message, "code": status_code, "type": report.type},
    )


# ============================================================================
# STARTUP / HEALTH
# ============================================================================

def provider_status() -> dict:
    return {
        "gemini": "ACTIVE" if settings.GEMINI_API_KEY else "MISSING",
        "openai": "ACTIVE" if settings.OPENAI_API_KEY else "MISSING",
    }


@app.on_event("startup")
async def startup_event():
    """Log which providers are usable."""
    status = provider_status()
    logger.info(f"Banking SEO Studio {__version__} starting ({settings.ENVIRONMENT})")
    logger.info(f"GEMINI API KEY: {status['gemini']}")
    logger.info(f"OPENAI API KEY: {status['openai']}")


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
        "providers": provider_status(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.app:app", host="0.0.0.0", port=settings.PORT, reload=settings.is_development)
