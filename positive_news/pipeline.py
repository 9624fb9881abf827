from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .config import PipelineConfig
from .dedupe import ArchiveIndex, ArchiveMatcher, dedupe_batch
from .models import Candidate, SourceBatch
from .normalizer import normalize
from .providers.base import BaseProvider, ProviderList
from .providers.newsapi_provider import NewsAPIProvider
from .providers.rss_provider import RSSFeedProvider
from .scoring import PositivityScorer
from .selector import select
from .storage import ArchiveRepository, JsonArchiveRepository, write_candidates

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineStats:
    fetched: int = 0
    qualified: int = 0
    unique: int = 0
    unpublished: int = 0
    selected: int = 0
    failed_sources: List[str] = field(default_factory=list)


@dataclass(slots=True)
class PipelineResult:
    candidates: List[Candidate]
    stats: PipelineStats


class NewsPipeline:
    """Fetches, scores, deduplicates and ranks candidate articles.

    Stages run in order: normalize, score and qualify, batch dedupe,
    archive filter, select. The output is the list handed to curation.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        providers: Optional[Iterable[BaseProvider]] = None,
        archive: Optional[ArchiveRepository] = None,
    ) -> None:
        self.config = config or PipelineConfig.from_env()
        if providers is not None:
            self.providers: ProviderList = list(providers)
        else:
            self.providers = self._build_providers()
        if not self.providers:
            raise RuntimeError("No providers configured for NewsPipeline")
        self.archive = archive or JsonArchiveRepository(self.config.archive_path)
        self.scorer = PositivityScorer(self.config.scoring)

    def _build_providers(self) -> ProviderList:
        providers: ProviderList = [
            RSSFeedProvider(
                self.config.feeds,
                items_per_feed=self.config.items_per_feed,
                timeout=self.config.fetch_timeout,
            )
        ]
        if self.config.newsapi_key:
            providers.append(
                NewsAPIProvider(
                    self.config.newsapi_key,
                    self.config.queries,
                    page_size=self.config.newsapi_page_size,
                    timeout=self.config.fetch_timeout,
                )
            )
        else:
            logger.info("NEWS_API_KEY not set, skipping NewsAPI")
        return providers

    def run(self, now: Optional[datetime] = None, max_count: Optional[int] = None) -> PipelineResult:
        now = now or datetime.now(timezone.utc)
        stats = PipelineStats()

        candidates: List[Candidate] = []
        for batch in self._fetch_all(stats):
            for raw in batch.items:
                candidates.append(normalize(raw, batch.meta, now=now))
        stats.fetched = len(candidates)

        qualified: List[Candidate] = []
        for candidate in candidates:
            self.scorer.apply(candidate)
            if self.scorer.qualifies(candidate):
                qualified.append(candidate)
            else:
                logger.debug("Dropped (score %d): %s", candidate.score, candidate.title)
        stats.qualified = len(qualified)

        unique = dedupe_batch(qualified, self.config.matching)
        stats.unique = len(unique)

        index = ArchiveIndex.build(self.archive.load_archive(), self.config.matching)
        logger.info("Archive index holds %d titles and URLs", len(index))
        matcher = ArchiveMatcher(index)
        unpublished: List[Candidate] = []
        for candidate in unique:
            reason = matcher.match_reason(candidate)
            if reason is not None:
                logger.debug("Already published (%s): %s", reason, candidate.title)
                continue
            unpublished.append(candidate)
        stats.unpublished = len(unpublished)

        limit = self.config.max_candidates if max_count is None else max_count
        selected = select(unpublished, limit)
        stats.selected = len(selected)

        logger.info(
            "Found %d positive articles (from %d total; %d qualified, %d unique, %d unpublished)",
            stats.selected,
            stats.fetched,
            stats.qualified,
            stats.unique,
            stats.unpublished,
        )
        if stats.failed_sources:
            logger.info("%d source(s) failed: %s", len(stats.failed_sources), ", ".join(stats.failed_sources))
        return PipelineResult(candidates=selected, stats=stats)

    def _fetch_all(self, stats: PipelineStats) -> List[SourceBatch]:
        batches: List[SourceBatch] = []
        for provider in self.providers:
            try:
                for batch in provider.fetch():
                    if batch.failed:
                        stats.failed_sources.append(batch.meta.name)
                        continue
                    batches.append(batch)
            except Exception:
                logger.warning("Provider %s failed", provider.name, exc_info=True)
                stats.failed_sources.append(provider.name)
        return batches

    def save(self, result: PipelineResult, path: Optional[str] = None) -> Path:
        return write_candidates(path or self.config.output_path, [candidate_to_dict(c) for c in result.candidates])


def candidate_to_dict(candidate: Candidate) -> Dict[str, object]:
    return {
        "title": candidate.title,
        "link": candidate.link,
        "description": candidate.description,
        "pubDate": candidate.published_at.isoformat(),
        "source": candidate.source_name,
        "sourceUrl": candidate.link,
        "category": candidate.category,
        "author": candidate.author,
        "positivityScore": candidate.score,
    }


def stats_to_dict(stats: PipelineStats) -> Dict[str, object]:
    return asdict(stats)
