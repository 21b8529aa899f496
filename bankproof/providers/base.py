"""
Base class for verification providers.

A provider is a named capability: the pattern set that locates its codes
in document text, and the call that confirms a key/pin pair with its
authority. The pipeline selects providers by name and never looks inside.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional
import logging

from bankproof.core.error_handling import ProviderConfigurationError
from bankproof.models.verification_models import (
    PatternSet,
    RequestContext,
    VerificationOutcome,
    VerificationStatus,
)

logger = logging.getLogger(__name__)


class BaseVerificationProvider(ABC):
    """Abstract base class for all verification providers.

    Subclasses must implement:
    - verify(): confirm a key/pin pair and classify the result

    Providers are stateless beyond their fixed configuration and may be
    shared by concurrent requests.
    """

    def __init__(self, name: str, patterns: PatternSet):
        """
        Args:
            name: Registry name, also reported on every outcome
            patterns: Pattern set used to extract this provider's codes

        Raises:
            ProviderConfigurationError: If name is empty
        """
        if not name or not name.strip():
            raise ProviderConfigurationError(f"{self.__class__.__name__} requires a non-empty name")
        self._name = name
        self._patterns = patterns

    @property
    def name(self) -> str:
        return self._name

    @property
    def patterns(self) -> PatternSet:
        return self._patterns

    @abstractmethod
    async def verify(
        self,
        key: str,
        pin: str,
        context: Optional[RequestContext] = None
    ) -> VerificationOutcome:
        """Confirm a key/pin pair with the provider's authority.

        Args:
            key: Primary code as typed or extracted
            pin: Secondary code as typed or extracted
            context: Timeout, cancellation and logger for this request

        Returns:
            VerificationOutcome; expected failures are outcomes, not exceptions
        """
        pass

    def outcome(
        self,
        status: VerificationStatus,
        message: Optional[str] = None,
        raw: Optional[Any] = None
    ) -> VerificationOutcome:
        """Build an outcome stamped with this provider's name."""
        return VerificationOutcome(status=status, provider=self.name, message=message, raw=raw)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"
