from bankproof.models.verification_models import (
    ExtractedCodes,
    PatternSet,
    RequestContext,
    VerificationOutcome,
    VerificationStatus,
)
from bankproof.models.api_models import ValidateRequest

__all__ = [
    "ExtractedCodes",
    "PatternSet",
    "RequestContext",
    "ValidateRequest",
    "VerificationOutcome",
    "VerificationStatus",
]
