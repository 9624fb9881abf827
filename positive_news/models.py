from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union


@dataclass(slots=True)
class RawItem:
    """Raw item as returned by a feed or search API."""

    title: Optional[str] = None
    link: Optional[str] = None
    summary: Optional[str] = None
    published: Union[datetime, str, None] = None
    source: Optional[str] = None
    author: Optional[str] = None


@dataclass(slots=True)
class SourceMeta:
    """Display name and category configured for a source."""

    name: str
    category: str = "general"


@dataclass(slots=True)
class SourceBatch:
    """Items fetched from a single source."""

    meta: SourceMeta
    items: List[RawItem] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(slots=True)
class Candidate:
    """Canonical article record the pipeline ranks and filters."""

    title: str
    link: str
    description: str
    published_at: datetime
    source_name: str
    category: str
    author: Optional[str] = None
    score: Optional[int] = None


@dataclass(slots=True, frozen=True)
class ArchiveEntry:
    """Previously published article, as recorded by the site generator."""

    headline: str
    source_url: str = ""
    original_title: Optional[str] = None
