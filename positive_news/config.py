from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

CATEGORIES: Tuple[str, ...] = ("general", "climate", "health", "science", "wildlife", "people")
DEFAULT_CATEGORY = "general"

POSITIVE_KEYWORDS: Tuple[str, ...] = (
    "breakthrough", "success", "achieve", "discover", "cure", "solve", "improve",
    "record", "first", "milestone", "victory", "win", "protect", "save", "restore",
    "recover", "grow", "increase", "reduce pollution", "clean energy", "renewable",
    "conservation", "preserved", "thriving", "hope", "progress", "advance",
    "treatment", "vaccine", "therapy", "innovation", "solution", "rescued",
    "recovery", "healing", "sustainable", "green", "solar", "wind power",
    "electric", "recycling", "biodiversity", "reforestation", "rewilding",
)

NEGATIVE_KEYWORDS: Tuple[str, ...] = (
    "death", "dies", "killed", "murder", "attack", "terror", "war", "crisis",
    "disaster", "catastrophe", "collapse", "crash", "fear", "threat", "danger",
    "scandal", "corruption", "fraud", "violence", "victim", "tragedy", "worst",
    "devastating", "alarming", "warning", "extinct", "failed", "failure",
)

TRUSTED_SOURCES: FrozenSet[str] = frozenset(
    {"Positive News", "Good News Network", "Reasons to be Cheerful"}
)


@dataclass(slots=True, frozen=True)
class FeedSource:
    url: str
    name: str
    category: str = DEFAULT_CATEGORY


@dataclass(slots=True, frozen=True)
class SearchQuery:
    query: str
    category: str = DEFAULT_CATEGORY


DEFAULT_FEEDS: Tuple[FeedSource, ...] = (
    FeedSource("https://www.positive.news/feed/", "Positive News"),
    FeedSource("https://www.goodnewsnetwork.org/feed/", "Good News Network"),
    FeedSource("https://reasonstobecheerful.world/feed/", "Reasons to be Cheerful"),
    FeedSource("https://www.theguardian.com/environment/rss", "The Guardian Environment", "climate"),
    FeedSource("https://www.sciencedaily.com/rss/top/environment.xml", "Science Daily Environment", "climate"),
    FeedSource("https://www.sciencedaily.com/rss/earth_climate.xml", "Science Daily Climate", "climate"),
    FeedSource("https://www.sciencedaily.com/rss/health_medicine.xml", "Science Daily Health", "health"),
    FeedSource("https://www.sciencedaily.com/rss/mind_brain.xml", "Science Daily Mind", "health"),
    FeedSource("https://www.nature.com/nature.rss", "Nature", "science"),
    FeedSource("https://feeds.bbci.co.uk/news/science_and_environment/rss.xml", "BBC Science", "science"),
    FeedSource("https://www.sciencedaily.com/rss/top/science.xml", "Science Daily Top", "science"),
    FeedSource("https://www.sciencedaily.com/rss/plants_animals.xml", "Science Daily Animals", "wildlife"),
)

DEFAULT_QUERIES: Tuple[SearchQuery, ...] = (
    SearchQuery("scientific breakthrough", "science"),
    SearchQuery("medical breakthrough", "health"),
    SearchQuery("new treatment approved", "health"),
    SearchQuery("disease cure", "health"),
    SearchQuery("renewable energy record", "climate"),
    SearchQuery("climate solution", "climate"),
    SearchQuery("solar power milestone", "climate"),
    SearchQuery("wind energy record", "climate"),
    SearchQuery("conservation success", "wildlife"),
    SearchQuery("species recovery", "wildlife"),
    SearchQuery("wildlife protection", "wildlife"),
    SearchQuery("endangered species saved", "wildlife"),
    SearchQuery("community success story", "people"),
    SearchQuery("humanitarian achievement", "people"),
)


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(slots=True, frozen=True)
class ScoringConfig:
    """Keyword lists and weights used by the positivity scorer."""

    positive_keywords: Tuple[str, ...] = POSITIVE_KEYWORDS
    negative_keywords: Tuple[str, ...] = NEGATIVE_KEYWORDS
    trusted_sources: FrozenSet[str] = TRUSTED_SOURCES
    positive_reward: int = 2
    negative_penalty: int = 10
    trust_bonus: int = 5


@dataclass(slots=True, frozen=True)
class MatchConfig:
    """Constants for batch and archive duplicate detection."""

    batch_title_prefix: int = 50
    archive_title_prefix: int = 80
    min_word_length: int = 3
    min_significant_words: int = 4
    overlap_threshold: float = 0.7
    batch_fuzzy: bool = True


@dataclass(slots=True)
class PipelineConfig:
    """Runtime configuration for the ingestion pipeline."""

    newsapi_key: Optional[str] = None
    max_candidates: int = 100
    fetch_timeout: float = 15.0
    items_per_feed: int = 20
    newsapi_page_size: int = 10
    archive_path: str = "data/archive.json"
    output_path: str = "data/raw-articles.json"
    feeds: Tuple[FeedSource, ...] = DEFAULT_FEEDS
    queries: Tuple[SearchQuery, ...] = DEFAULT_QUERIES
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    matching: MatchConfig = field(default_factory=MatchConfig)

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        import os

        trusted = _split_csv(os.getenv("POSITIVE_NEWS_TRUSTED_SOURCES"))
        scoring = ScoringConfig(trusted_sources=frozenset(trusted)) if trusted else ScoringConfig()
        return cls(
            newsapi_key=os.getenv("NEWS_API_KEY") or None,
            max_candidates=_parse_int(os.getenv("POSITIVE_NEWS_MAX_CANDIDATES"), "POSITIVE_NEWS_MAX_CANDIDATES", 100),
            fetch_timeout=float(_parse_int(os.getenv("POSITIVE_NEWS_FETCH_TIMEOUT"), "POSITIVE_NEWS_FETCH_TIMEOUT", 15)),
            items_per_feed=_parse_int(os.getenv("POSITIVE_NEWS_ITEMS_PER_FEED"), "POSITIVE_NEWS_ITEMS_PER_FEED", 20),
            archive_path=os.getenv("POSITIVE_NEWS_ARCHIVE_PATH") or "data/archive.json",
            output_path=os.getenv("POSITIVE_NEWS_OUTPUT_PATH") or "data/raw-articles.json",
            scoring=scoring,
        )


def _parse_int(value: Optional[str], name: str, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer if set") from None
    if parsed < 0:
        raise ValueError(f"{name} must not be negative")
    return parsed
