from __future__ import annotations

from abc import ABC, abstractmethod
import json
import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from .models import ArchiveEntry

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ArchiveRepository(ABC):
    """Read access to the history of published articles."""

    @abstractmethod
    def load_archive(self) -> List[ArchiveEntry]:
        """Return every archived article."""


class InMemoryArchiveRepository(ArchiveRepository):
    def __init__(self, entries: Optional[Iterable[ArchiveEntry]] = None) -> None:
        self._entries = list(entries or [])

    def load_archive(self) -> List[ArchiveEntry]:
        return list(self._entries)


class JsonArchiveRepository(ArchiveRepository):
    """Archive kept as a JSON file by the site generator.

    A missing or unreadable file is treated as an empty archive.
    """

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def load_archive(self) -> List[ArchiveEntry]:
        if not self.path.exists():
            logger.info("No archive at %s, treating as empty", self.path)
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read archive %s: %s", self.path, exc)
            return []
        if isinstance(payload, Mapping):
            payload = payload.get("articles", [])
        if not isinstance(payload, list):
            logger.warning("Archive %s has unexpected shape, treating as empty", self.path)
            return []
        entries = [entry for entry in (_parse_entry(record) for record in payload) if entry is not None]
        logger.info("Loaded %d archived articles from %s", len(entries), self.path)
        return entries


def _parse_entry(record: object) -> Optional[ArchiveEntry]:
    if not isinstance(record, Mapping):
        return None
    headline = _first_str(record, ("headline", "title"))
    source_url = _first_str(record, ("sourceUrl", "source_url", "url"))
    if not headline and not source_url:
        return None
    return ArchiveEntry(
        headline=headline,
        source_url=source_url,
        original_title=_first_str(record, ("originalTitle", "original_title")) or None,
    )


def _first_str(record: Mapping[str, object], keys: Sequence[str]) -> str:
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def write_candidates(path: PathLike, records: Sequence[Mapping[str, object]]) -> Path:
    """Write the curation handoff file and return its path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(list(records), indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Saved %d candidates to %s", len(records), target)
    return target
