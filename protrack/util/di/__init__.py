"""Dependency injection module."""

from typing import Type

from protrack.util.di.application import ProdApplicationProvider
from protrack.util.di.base import Component, ProviderBase
from protrack.util.di.core import ProdConfigProvider
from protrack.util.di.domain import ProdDomainProvider
from protrack.util.di.infrastructure import (
    IdentityComponentProvider,
    PersistenceProvider,
    ProdIdentityComponentProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Components with a mock implementation
    IdentityComponentProvider,
    PersistenceProvider,
]


def components() -> set[Component]:
    """Names of all components that can be mocked."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.is_component() and base.__mock_component__
    }


def build_providers(mocked: set[Component] | None = None) -> list[ProviderBase]:
    """Instantiate one provider per registry entry.

    Args:
        mocked: Components to back with their mock implementation

    Returns:
        Provider instances ready for ``make_async_container``
    """
    mocked = mocked or set()
    return [
        base.implementation(use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "build_providers",
    "components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "IdentityComponentProvider",
    "PersistenceProvider",
    "ProdIdentityComponentProvider",
    "ProdPersistenceProvider",
]
