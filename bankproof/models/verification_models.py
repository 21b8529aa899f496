"""
Data structures flowing through the extraction and verification pipeline.

Everything here is created per request and discarded once the
VerificationOutcome is produced, except PatternSet, which a provider
builds once and shares read-only.
"""
import asyncio
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class VerificationStatus(str, Enum):
    """Tri-state classification of every verification attempt."""
    CONFIRMED = "CONFIRMED"
    INVALID = "INVALID"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


class VerificationOutcome(BaseModel):
    """Terminal artifact of the pipeline. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    status: VerificationStatus = Field(..., description="CONFIRMED, INVALID or ERROR")
    provider: str = Field(..., description="Name of the provider that produced the outcome")
    message: Optional[str] = Field(default=None, description="Reason code, e.g. MISSING_DATA or TIMEOUT")
    raw: Optional[Any] = Field(default=None, description="Upstream payload kept for diagnostics")

    @property
    def is_confirmed(self) -> bool:
        return self.status is VerificationStatus.CONFIRMED


@dataclass(frozen=True)
class PatternSet:
    """Per-provider rules locating the key and pin in normalized text.

    A pattern with a capture group yields the group; otherwise the whole
    match is used. ``distinct`` excludes the key's digits as a pin candidate.
    """

    key: Optional[re.Pattern] = None
    pin: Optional[re.Pattern] = None
    distinct: bool = True


@dataclass(frozen=True)
class ExtractedCodes:
    """Codes recovered from document text. None means not found."""

    normalized_text: str
    key: Optional[str] = None
    pin: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.key) and bool(self.pin)


@dataclass
class RequestContext:
    """Per-request options passed down the call chain.

    Attributes:
        timeout_ms: Verification budget; None uses VERIFICATION_TIMEOUT_MS
        cancel_event: Caller-owned cancellation signal, borrowed when set
        logger: Destination for decision-point events; None logs nothing
        language: OCR language hint; None uses OCR_DEFAULT_LANGUAGE
    """

    timeout_ms: Optional[int] = None
    cancel_event: Optional[asyncio.Event] = None
    logger: Optional[logging.Logger] = None
    language: Optional[str] = None
