"""Dependency injection for callbridge.

Every provider class is listed in PROVIDERS. Components with a test
stand-in (currently only persistence) are abstract bases whose subclasses
are told apart by ``__is_mock__``; the rest are used as they are.
"""

from typing import Type

from callbridge.util.di.application import ProdApplicationProvider
from callbridge.util.di.base import Component, ProviderBase
from callbridge.util.di.core import ProdConfigProvider
from callbridge.util.di.domain import ProdDomainProvider
from callbridge.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)
from callbridge.util.error import DependencyInjectionError

# Config, domain and application providers first; swappable components last
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a PROVIDERS entry to the class to instantiate.

    A provider without subclasses is returned unchanged. For a swappable
    component the subclass whose ``__is_mock__`` equals ``use_mock`` is
    returned, so ``PersistenceProvider`` yields the PostgreSQL provider in
    production and the in-memory one in tests.

    Raises:
        DependencyInjectionError: If the component has no implementation
            of the requested kind
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise DependencyInjectionError(
            f"No {kind} implementation for {component_name}"
        )

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
