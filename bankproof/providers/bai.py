"""
Banco BAI (Angola) proof-of-payment verification.

BAI receipts print a 9-digit key ("chave") and an 8-digit pin. The
validator endpoint expects both fields base64-encoded twice. This double
encoding is a quirk of the BAI API and belongs to this provider only. Short
codes are zero-padded to the printed widths.
"""
import base64
import re
from typing import Any, Dict, Optional

import httpx

from bankproof.core.config import settings
from bankproof.models.verification_models import PatternSet
from bankproof.providers.confirmation import ConfirmationAuthorityProvider

BAI_NAME = "BAI"
BAI_FIELD_WIDTH = 9
BAI_PIN_WIDTH = 8

# Wire keys fixed by the BAI validator
BAI_KEY_FIELD = "VK0001"
BAI_PIN_FIELD = "VR0001"

BAI_PATTERNS = PatternSet(
    key=re.compile(r"(?:\b(?:chave|key)\b\W{0,3})?\b(\d{9})\b", re.IGNORECASE),
    pin=re.compile(r"(?:\bpin\b\W{0,3})?\b(\d{8})\b", re.IGNORECASE),
    distinct=True,
)


def double_base64(value: str) -> str:
    """base64(base64(value)), both stages over ASCII text."""
    once = base64.b64encode(value.encode("utf-8")).decode("ascii")
    return base64.b64encode(once.encode("ascii")).decode("ascii")


class BaiProvider(ConfirmationAuthorityProvider):
    """Provider for the Banco BAI payment validator."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            endpoint: Validator URL (default from settings)
            timeout_ms: Request budget (default from settings, 5000)
            client: Persistent AsyncClient to reuse
        """
        super().__init__(
            name=BAI_NAME,
            patterns=BAI_PATTERNS,
            endpoint=endpoint or settings.BAI_ENDPOINT,
            field_width=BAI_FIELD_WIDTH,
            timeout_ms=timeout_ms,
            client=client,
            pin_width=BAI_PIN_WIDTH,
        )

    def encode_field(self, value: str) -> str:
        return double_base64(value)

    def build_payload(self, encoded_key: str, encoded_pin: str) -> Dict[str, Any]:
        return {
            BAI_PIN_FIELD: encoded_pin,
            BAI_KEY_FIELD: encoded_key,
        }
