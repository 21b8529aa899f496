"""
Public entry points: validate typed codes, or extract them from a document
first and then validate.

Both apply the same short-circuit: a missing key or pin is reported as
INVALID/MISSING_DATA and the provider is never called.
"""
import logging
from typing import Optional

from bankproof.core.constants import MISSING_DATA
from bankproof.core.logging import log_event, resolve_logger
from bankproof.core.utils import BytesLike, to_bytes
from bankproof.models.verification_models import (
    RequestContext,
    VerificationOutcome,
    VerificationStatus,
)
from bankproof.providers.registry import ProviderRef, resolve_provider
from bankproof.services.code_extractor import extract_codes
from bankproof.services.extraction_orchestrator import (
    ExtractionOrchestrator,
    get_extraction_orchestrator,
)
from bankproof.services.text_normalizer import normalize_text

logger = logging.getLogger(__name__)


def _missing_data(provider_name: str) -> VerificationOutcome:
    return VerificationOutcome(
        status=VerificationStatus.INVALID,
        provider=provider_name,
        message=MISSING_DATA,
    )


async def validate_codes(
    key: Optional[str],
    pin: Optional[str],
    provider: ProviderRef,
    context: Optional[RequestContext] = None
) -> VerificationOutcome:
    """
    Validate a key/pin pair supplied directly by the caller.

    Args:
        key: Primary code
        pin: Secondary code
        provider: Provider instance or registered name
        context: Timeout, cancellation and logger for this request

    Returns:
        The provider's outcome, or INVALID/MISSING_DATA if a code is absent

    Raises:
        UnknownProviderError: If provider is a name nobody registered
    """
    resolved = resolve_provider(provider)
    context = context or RequestContext()

    if not key or not pin:
        log_event(
            resolve_logger(context.logger), logging.INFO, "verification_outcome",
            provider=resolved.name, status=VerificationStatus.INVALID.value, reason=MISSING_DATA,
        )
        return _missing_data(resolved.name)

    return await resolved.verify(key, pin, context)


async def extract_and_validate(
    data: BytesLike,
    provider: ProviderRef,
    context: Optional[RequestContext] = None,
    orchestrator: Optional[ExtractionOrchestrator] = None
) -> VerificationOutcome:
    """
    Extract the key/pin pair from a document and validate it.

    The provider's own pattern set drives extraction. Extraction failures
    never raise; they surface as INVALID/MISSING_DATA.

    Args:
        data: PDF or image bytes
        provider: Provider instance or registered name
        context: Timeout, cancellation, logger and OCR language
        orchestrator: Text acquisition strategy (default: PDF text layer + OCR)

    Returns:
        VerificationOutcome for the extracted codes
    """
    resolved = resolve_provider(provider)
    context = context or RequestContext()
    orchestrator = orchestrator or get_extraction_orchestrator()
    events = resolve_logger(context.logger)

    text = await orchestrator.extract_text(
        to_bytes(data),
        language=context.language,
        request_logger=context.logger,
    )
    extracted = extract_codes(normalize_text(text), resolved.patterns)

    log_event(
        events, logging.DEBUG, "codes_extracted",
        provider=resolved.name,
        key_found=extracted.key is not None,
        pin_found=extracted.pin is not None,
        text_chars=len(extracted.normalized_text),
    )

    if not extracted.is_complete:
        log_event(
            events, logging.INFO, "verification_outcome",
            provider=resolved.name, status=VerificationStatus.INVALID.value, reason=MISSING_DATA,
        )
        return _missing_data(resolved.name)

    return await resolved.verify(extracted.key, extracted.pin, context)
