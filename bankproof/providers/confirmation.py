"""
Generic provider for confirmation authorities reached over HTTP.

Covers authorities that accept a fixed-width numeric key/pin pair in a JSON
POST and answer with a JSON payload. Subclasses supply the field encoding
and payload layout; the shape checks, the single bounded request and the
response classification live here.
"""
import logging
import re
from abc import abstractmethod
from typing import Any, Dict, Optional, Tuple

import httpx

from bankproof.core import constants
from bankproof.core.cancellation import CancellationScope
from bankproof.core.config import settings
from bankproof.core.error_handling import ProviderConfigurationError, RequestCancelledError
from bankproof.core.http_client import get_managed_client
from bankproof.core.logging import log_event, resolve_logger
from bankproof.models.verification_models import (
    PatternSet,
    RequestContext,
    VerificationOutcome,
    VerificationStatus,
)
from bankproof.providers.base import BaseVerificationProvider

logger = logging.getLogger(__name__)

# Separators people and OCR put inside printed codes
_SEPARATORS = re.compile(r"[\s.\-/]+")

Classification = Tuple[VerificationStatus, Optional[str], Any]


class ConfirmationAuthorityProvider(BaseVerificationProvider):
    """Verification over a single JSON POST to an authority endpoint.

    Subclasses must implement:
    - encode_field(): authority-specific encoding of one canonical code
    - build_payload(): request body from the encoded key and pin

    Subclasses may override:
    - is_confirmed(): success heuristic for 2xx payloads
    """

    #: Payload flag read by the default is_confirmed()
    error_flag: str = "error"

    def __init__(
        self,
        name: str,
        patterns: PatternSet,
        endpoint: str,
        field_width: int,
        timeout_ms: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
        pin_width: Optional[int] = None
    ):
        """
        Args:
            name: Registry name
            patterns: Pattern set for extraction
            endpoint: Authority URL receiving the POST
            field_width: Longest accepted code; the key is zero-padded to it
            timeout_ms: Provider default budget (default from settings)
            client: Persistent AsyncClient to reuse; a temporary one is
                created per request otherwise
            pin_width: Width the pin is zero-padded to (default field_width)

        Raises:
            ProviderConfigurationError: If endpoint or a width is invalid
        """
        super().__init__(name, patterns)
        if not endpoint:
            raise ProviderConfigurationError(f"{name}: endpoint is required")
        if pin_width is None:
            pin_width = field_width
        if field_width < 1 or not 1 <= pin_width <= field_width:
            raise ProviderConfigurationError(
                f"{name}: widths must satisfy 1 <= pin_width <= field_width"
            )

        self.endpoint = endpoint
        self.field_width = field_width
        self.pin_width = pin_width
        self.timeout_ms = timeout_ms
        self._client = client
        self._code_pattern = re.compile(rf"\d{{1,{field_width}}}")

        logger.info(f"Initialized {self.__class__.__name__} name={name} endpoint={endpoint}")

    @abstractmethod
    def encode_field(self, value: str) -> str:
        """Encode one canonical, zero-padded code for the wire."""
        pass

    @abstractmethod
    def build_payload(self, encoded_key: str, encoded_pin: str) -> Dict[str, Any]:
        """Build the JSON request body."""
        pass

    def is_confirmed(self, payload: Any) -> bool:
        """
        Decide whether a 2xx payload confirms the pair.

        The default reads ``error_flag``: a JSON object without it, or with
        it false, confirms. Anything that is not a JSON object does not.
        """
        if not isinstance(payload, dict):
            return False
        return not payload.get(self.error_flag)

    def canonicalize(self, value: Optional[str], width: Optional[int] = None) -> Optional[str]:
        """
        Reduce a code to digits zero-padded to ``width``, or None if malformed.

        Separators are dropped; any other non-digit rejects the code, as does
        a run longer than ``field_width``. ``width`` defaults to
        ``field_width``.
        """
        if value is None:
            return None
        compact = _SEPARATORS.sub("", value.strip())
        if not self._code_pattern.fullmatch(compact):
            return None
        return compact.zfill(width or self.field_width)

    def resolve_timeout(self, context: RequestContext) -> float:
        """Timeout budget in seconds: context, then provider, then settings."""
        if context.timeout_ms is not None:
            timeout_ms = context.timeout_ms
        elif self.timeout_ms is not None:
            timeout_ms = self.timeout_ms
        else:
            timeout_ms = settings.VERIFICATION_TIMEOUT_MS
        return timeout_ms / 1000

    async def verify(
        self,
        key: str,
        pin: str,
        context: Optional[RequestContext] = None
    ) -> VerificationOutcome:
        context = context or RequestContext()
        events = resolve_logger(context.logger)

        canonical_key = self.canonicalize(key)
        canonical_pin = self.canonicalize(pin, self.pin_width)
        if canonical_key is None or canonical_pin is None:
            return self._decide(
                events,
                VerificationStatus.INVALID,
                constants.INVALID_INPUT_FORMAT,
                key_ok=canonical_key is not None,
                pin_ok=canonical_pin is not None,
            )

        payload = self.build_payload(
            self.encode_field(canonical_key),
            self.encode_field(canonical_pin)
        )
        timeout = self.resolve_timeout(context)
        log_event(
            events, logging.DEBUG, "verification_request_composed",
            provider=self.name, endpoint=self.endpoint, timeout_s=timeout,
            borrowed_signal=context.cancel_event is not None,
        )

        try:
            async with get_managed_client(self._client, timeout) as client:
                with CancellationScope(context.cancel_event, timeout) as scope:
                    response = await scope.run(
                        client.post(
                            self.endpoint,
                            json=payload,
                            headers=constants.JSON_HEADERS,
                            timeout=timeout,
                        )
                    )
        except RequestCancelledError as e:
            reason = constants.TIMEOUT if e.timed_out else constants.TEMPORARY_FAILURE
            log_event(events, logging.WARNING, "verification_transport_error", provider=self.name, error=str(e))
            return self._decide(events, VerificationStatus.ERROR, reason)
        except httpx.TimeoutException as e:
            log_event(events, logging.WARNING, "verification_transport_error", provider=self.name, error=repr(e))
            return self._decide(events, VerificationStatus.ERROR, constants.TIMEOUT)
        except httpx.HTTPError as e:
            log_event(events, logging.WARNING, "verification_transport_error", provider=self.name, error=repr(e))
            return self._decide(events, VerificationStatus.ERROR, constants.TEMPORARY_FAILURE)

        log_event(
            events, logging.DEBUG, "verification_response_received",
            provider=self.name, status_code=response.status_code,
        )
        status, message, raw = self.classify_response(response)
        return self._decide(events, status, message, raw=raw)

    def classify_response(self, response: httpx.Response) -> Classification:
        """Map an authority response to (status, reason, raw payload)."""
        payload = _read_payload(response)

        if response.is_server_error:
            return (
                VerificationStatus.ERROR,
                _payload_message(payload) or constants.SERVER_ERROR,
                payload,
            )
        if response.is_client_error:
            return (
                VerificationStatus.INVALID,
                _payload_message(payload) or constants.INVALID_REQUEST,
                payload,
            )
        if self.is_confirmed(payload):
            return VerificationStatus.CONFIRMED, None, payload
        return VerificationStatus.INVALID, constants.UNCONFIRMED_RESPONSE, payload

    def _decide(
        self,
        events: logging.Logger,
        status: VerificationStatus,
        message: Optional[str] = None,
        raw: Optional[Any] = None,
        **fields: Any
    ) -> VerificationOutcome:
        level = logging.WARNING if status is VerificationStatus.ERROR else logging.INFO
        log_event(
            events, level, "verification_outcome",
            provider=self.name, status=status.value, reason=message, **fields,
        )
        return self.outcome(status, message, raw)


def _read_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _payload_message(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None
