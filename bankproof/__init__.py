"""
Bank proof-of-payment extraction and verification.

Extracts a key/pin code pair from a PDF or scanned image and confirms it
against an external verification authority.
"""
from bankproof.models.verification_models import (
    ExtractedCodes,
    PatternSet,
    RequestContext,
    VerificationOutcome,
    VerificationStatus,
)
from bankproof.providers import BaiProvider, BaseVerificationProvider, get_provider_registry
from bankproof.services.validation_service import extract_and_validate, validate_codes

__all__ = [
    "BaiProvider",
    "BaseVerificationProvider",
    "ExtractedCodes",
    "PatternSet",
    "RequestContext",
    "VerificationOutcome",
    "VerificationStatus",
    "extract_and_validate",
    "get_provider_registry",
    "validate_codes",
]
