from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List

from ..models import SourceBatch


class BaseProvider(ABC):
    """Abstract base class for content providers."""

    name: str = "provider"

    @abstractmethod
    def fetch(self) -> Iterable[SourceBatch]:
        """Yield one ``SourceBatch`` per configured source.

        A source that fails should be skipped rather than abort the others.
        """


ProviderList = List[BaseProvider]
