"""Dependency injection wiring.

Providers are listed once in PROVIDERS. A provider with subclasses is a
mockable component: its subclasses are the production and mock variants,
told apart by ``__is_mock__``. Any other provider is used as-is.
"""

from typing import Type

from discuss.util.di.application import ProdApplicationProvider
from discuss.util.di.base import Component, ProviderBase
from discuss.util.di.core import ProdConfigProvider
from discuss.util.di.domain import ProdDomainProvider
from discuss.util.di.infrastructure import (
    NotificationProvider,
    PersistenceProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
)
from discuss.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable components
    PersistenceProvider,
    NotificationProvider,
]


def is_mockable(base: Type[ProviderBase]) -> bool:
    """Whether the provider is a component with swappable variants."""
    return bool(base.__subclasses__())


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a PROVIDERS entry to the provider class to instantiate.

    Raises:
        DependencyInjectionError: If a mockable component lacks the
            requested variant
    """
    if not is_mockable(base):
        return base

    variants = {c.__is_mock__: c for c in base.__subclasses__()}
    try:
        return variants[use_mock]
    except KeyError:
        kind = "mock" if use_mock else "production"
        raise DependencyInjectionError(
            f"No {kind} implementation for {base.__mock_component__}"
        ) from None


__all__ = [
    "Component",
    "NotificationProvider",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
    "is_mockable",
]
