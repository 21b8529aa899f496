from fastapi import APIRouter

from bankproof.core.config import settings
from bankproof.providers.registry import get_provider_registry

router = APIRouter()


@router.get("/")
async def root():
    """Basic health check endpoint."""
    return {"message": "BankProof Validator API", "status": "healthy"}


@router.get("/health")
async def health_check():
    """
    Health check with provider configuration.

    Verification authorities are not contacted; this only reports what is
    registered and how requests are bounded.
    """
    registry = get_provider_registry()
    health_status = {
        "status": "healthy",
        "service": "BankProof Validator",
        "version": "1.0",
        "providers": registry.names,
        "default_provider": settings.DEFAULT_PROVIDER,
        "verification_timeout_ms": settings.VERIFICATION_TIMEOUT_MS,
        "ocr_language": settings.OCR_DEFAULT_LANGUAGE,
    }

    if settings.DEFAULT_PROVIDER not in registry:
        health_status["status"] = "degraded"
        health_status["warning"] = f"Default provider {settings.DEFAULT_PROVIDER} is not registered"

    return health_status
