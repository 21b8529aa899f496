"""
Process-wide registry of verification providers.

Built once at startup and read-only afterwards. Lookups are by name,
case-insensitive.
"""
import logging
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional, Union

from bankproof.core.error_handling import ProviderConfigurationError, UnknownProviderError
from bankproof.providers.bai import BaiProvider
from bankproof.providers.base import BaseVerificationProvider

logger = logging.getLogger(__name__)

ProviderRef = Union[BaseVerificationProvider, str]


class ProviderRegistry:
    """Immutable name -> provider mapping."""

    def __init__(self, providers: Iterable[BaseVerificationProvider]):
        """
        Raises:
            ProviderConfigurationError: If two providers share a name
        """
        entries = {}
        for provider in providers:
            key = provider.name.upper()
            if key in entries:
                raise ProviderConfigurationError(f"Duplicate provider name: {provider.name}")
            entries[key] = provider
        self._providers = MappingProxyType(entries)
        logger.info(f"Provider registry initialized with: {', '.join(self.names) or 'none'}")

    @property
    def names(self) -> List[str]:
        return [provider.name for provider in self._providers.values()]

    def get(self, name: str) -> BaseVerificationProvider:
        """
        Raises:
            UnknownProviderError: If no provider is registered under name
        """
        provider = self._providers.get(name.upper())
        if provider is None:
            raise UnknownProviderError(name, self.names)
        return provider

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._providers

    def __iter__(self) -> Iterator[BaseVerificationProvider]:
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)


# Global singleton instance
_registry: Optional[ProviderRegistry] = None


def get_provider_registry() -> ProviderRegistry:
    """
    Get the global provider registry.

    Returns:
        Singleton ProviderRegistry holding every built-in provider
    """
    global _registry
    if _registry is None:
        _registry = ProviderRegistry([BaiProvider()])
    return _registry


def resolve_provider(provider: ProviderRef) -> BaseVerificationProvider:
    """Look a name up in the global registry; pass provider objects through."""
    if isinstance(provider, str):
        return get_provider_registry().get(provider)
    return provider
