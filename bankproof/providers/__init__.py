from bankproof.providers.base import BaseVerificationProvider
from bankproof.providers.confirmation import ConfirmationAuthorityProvider
from bankproof.providers.bai import BaiProvider
from bankproof.providers.registry import ProviderRegistry, get_provider_registry

__all__ = [
    "BaiProvider",
    "BaseVerificationProvider",
    "ConfirmationAuthorityProvider",
    "ProviderRegistry",
    "get_provider_registry",
]
