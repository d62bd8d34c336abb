"""Base use case."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator

import logfire

from protrack.adapter.error import ProviderError
from protrack.domain.error import UpstreamUnavailable


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


@contextmanager
def upstream(name: str) -> Iterator[None]:
    """Translate adapter failures inside the block to UpstreamUnavailable."""
    try:
        yield
    except ProviderError as e:
        logfire.warn("Upstream call failed", upstream=name, error=str(e))
        raise UpstreamUnavailable(name, str(e)) from e
