"""
Proof-of-payment validation API endpoints.

Supports direct key/pin validation (JSON) and document upload (multipart).
"""
import logging
from typing import Optional

from fastapi import APIRouter, File, UploadFile

from bankproof.core.config import settings
from bankproof.core.error_handling import DocumentValidationError, handle_validation_errors
from bankproof.models.api_models import ValidateRequest
from bankproof.models.verification_models import RequestContext, VerificationOutcome
from bankproof.providers.registry import get_provider_registry
from bankproof.services.validation_service import extract_and_validate, validate_codes

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")


def _request_context(language: Optional[str] = None) -> RequestContext:
    return RequestContext(
        logger=logging.getLogger("bankproof.requests"),
        language=language,
    )


@router.post("/validate", response_model=VerificationOutcome)
@handle_validation_errors("Failed to validate codes")
async def validate(
    request: ValidateRequest,
    provider: Optional[str] = None
) -> VerificationOutcome:
    """
    Validate a key/pin pair typed by the user.

    Args:
        request: Key (or "chave") and pin
        provider: Registered provider name (default from settings)

    Returns:
        VerificationOutcome as JSON
    """
    selected = get_provider_registry().get(provider or settings.DEFAULT_PROVIDER)
    return await validate_codes(request.key, request.pin, selected, _request_context())


@router.post("/upload", response_model=VerificationOutcome)
@handle_validation_errors("Failed to validate uploaded document")
async def upload(
    file: UploadFile = File(...),
    provider: Optional[str] = None,
    language: Optional[str] = None
) -> VerificationOutcome:
    """
    Extract key/pin from an uploaded PDF or image and validate them.

    Args:
        file: Proof-of-payment document
        provider: Registered provider name (default from settings)
        language: OCR language hint (default "eng")

    Returns:
        VerificationOutcome as JSON
    """
    selected = get_provider_registry().get(provider or settings.DEFAULT_PROVIDER)

    # One byte past the cap is enough to reject without buffering the rest
    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
    content = await file.read(max_bytes + 1)
    if not content:
        raise DocumentValidationError("Uploaded file is empty")
    if len(content) > max_bytes:
        raise DocumentValidationError(
            f"Document exceeds max allowed size of {settings.MAX_UPLOAD_MB} MB"
        )

    logger.info(f"Processing upload: {file.filename} ({len(content)} bytes) provider={selected.name}")
    return await extract_and_validate(content, selected, _request_context(language))
