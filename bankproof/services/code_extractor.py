"""
Key/pin recovery from normalized document text.

OCR output is noisy, so each pattern is scanned match by match and the
first candidate carrying at least one digit wins. Candidates are reduced
to their digits only; leading zeros are kept.
"""
import logging
import re
from typing import Optional

from bankproof.models.verification_models import ExtractedCodes, PatternSet

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D+")


def extract_digits(value: Optional[str]) -> Optional[str]:
    """Strip everything but digits; None when nothing is left."""
    if not value:
        return None
    digits = _NON_DIGITS.sub("", value)
    return digits or None


def _pick_candidate(
    text: str,
    pattern: Optional[re.Pattern],
    disallow: Optional[str] = None
) -> Optional[str]:
    if pattern is None:
        return None

    for match in pattern.finditer(text):
        # Prefer the first capture group (labelled forms like "PIN: 123");
        # a group that matched nothing yields no digits and is skipped
        if pattern.groups and match.group(1) is not None:
            candidate = match.group(1)
        else:
            candidate = match.group(0)
        digits = extract_digits(candidate)
        if digits is None:
            continue
        if disallow is not None and digits == disallow:
            continue
        return digits

    return None


def extract_codes(normalized_text: str, patterns: PatternSet) -> ExtractedCodes:
    """
    Apply a provider's pattern set to normalized text.

    Args:
        normalized_text: Output of normalize_text
        patterns: Provider pattern set

    Returns:
        ExtractedCodes with unset fields for anything not found
    """
    key = _pick_candidate(normalized_text, patterns.key)
    pin = _pick_candidate(
        normalized_text,
        patterns.pin,
        disallow=key if patterns.distinct else None
    )

    logger.debug(f"Extracted codes: key_found={key is not None}, pin_found={pin is not None}")
    return ExtractedCodes(normalized_text=normalized_text, key=key, pin=pin)
