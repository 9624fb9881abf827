from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple

from .config import MatchConfig
from .models import ArchiveEntry, Candidate

logger = logging.getLogger(__name__)

_STRIP_RE = re.compile(r"[^a-z0-9\s]")
_SPACE_RE = re.compile(r"\s+")


def dedupe_batch(candidates: Iterable[Candidate], config: Optional[MatchConfig] = None) -> List[Candidate]:
    """Collapse repeated stories within one fetch.

    Two candidates are the same story when their lower-cased titles share the
    first ``batch_title_prefix`` characters or, with ``batch_fuzzy`` enabled,
    when their significant words overlap as described for the archive. Order
    is preserved and the first occurrence wins.
    """
    config = config or MatchConfig()
    seen: Set[str] = set()
    accepted_words: List[FrozenSet[str]] = []
    unique: List[Candidate] = []
    for candidate in candidates:
        key = candidate.title.lower()[: config.batch_title_prefix]
        if key in seen:
            logger.debug("Batch duplicate dropped: %s", candidate.title)
            continue
        words = significant_words(normalize_title(candidate.title, config.archive_title_prefix), config.min_word_length)
        if config.batch_fuzzy and len(words) >= config.min_significant_words:
            if any(words_overlap(words, other, config.overlap_threshold) for other in accepted_words):
                logger.debug("Batch near-duplicate dropped: %s", candidate.title)
                continue
            accepted_words.append(words)
        seen.add(key)
        unique.append(candidate)
    return unique


def normalize_title(title: Optional[str], prefix_length: int = 80) -> str:
    lowered = _STRIP_RE.sub("", (title or "").lower())
    return _SPACE_RE.sub(" ", lowered).strip()[:prefix_length]


def significant_words(normalized: str, min_length: int = 3) -> FrozenSet[str]:
    return frozenset(word for word in normalized.split(" ") if len(word) > min_length)


def words_overlap(words: FrozenSet[str], other: FrozenSet[str], threshold: float = 0.7) -> bool:
    """Share of the smaller word set found in the other one, against ``threshold``."""
    return len(words & other) / min(len(words), len(other)) >= threshold


@dataclass(slots=True)
class ArchiveIndex:
    """Lookup structures over every previously published article."""

    config: MatchConfig = field(default_factory=MatchConfig)
    titles: Set[str] = field(default_factory=set)
    urls: Set[str] = field(default_factory=set)
    word_sets: List[Tuple[str, FrozenSet[str]]] = field(default_factory=list)

    @classmethod
    def build(cls, entries: Iterable[ArchiveEntry], config: Optional[MatchConfig] = None) -> "ArchiveIndex":
        index = cls(config=config or MatchConfig())
        for entry in entries:
            if entry.source_url:
                index.urls.add(entry.source_url)
            index._add_title(entry.headline)
            if entry.original_title:
                index._add_title(entry.original_title)
        return index

    def _add_title(self, title: str) -> None:
        normalized = normalize_title(title, self.config.archive_title_prefix)
        if not normalized or normalized in self.titles:
            return
        self.titles.add(normalized)
        words = significant_words(normalized, self.config.min_word_length)
        if len(words) >= self.config.min_significant_words:
            self.word_sets.append((normalized, words))

    def __len__(self) -> int:
        return len(self.titles) + len(self.urls)


class ArchiveMatcher:
    """Decides whether a candidate repeats something already published."""

    def __init__(self, index: ArchiveIndex) -> None:
        self.index = index
        self.config = index.config

    def is_published(self, candidate: Candidate) -> bool:
        return self.match_reason(candidate) is not None

    def match_reason(self, candidate: Candidate) -> Optional[str]:
        if candidate.link and candidate.link in self.index.urls:
            return "url"
        normalized = normalize_title(candidate.title, self.config.archive_title_prefix)
        if not normalized:
            return None
        if normalized in self.index.titles:
            return "title"
        words = significant_words(normalized, self.config.min_word_length)
        if len(words) < self.config.min_significant_words:
            return None
        for archived, archived_words in self.index.word_sets:
            if words_overlap(words, archived_words, self.config.overlap_threshold):
                logger.debug("Fuzzy archive match: %r ~ %r", normalized, archived)
                return "fuzzy"
        return None

