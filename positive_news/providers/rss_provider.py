from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Iterable, List, Mapping, Optional, Sequence

from bs4 import BeautifulSoup
import feedparser
import requests

from ..config import DEFAULT_FEEDS, FeedSource
from ..models import RawItem, SourceBatch, SourceMeta
from .base import BaseProvider

USER_AGENT = "Mozilla/5.0 (compatible; NewsBot/1.0)"

logger = logging.getLogger(__name__)


class RSSFeedProvider(BaseProvider):
    """Fetches entries from a fixed list of RSS/Atom feeds."""

    name = "rss"

    def __init__(
        self,
        feeds: Optional[Sequence[FeedSource]] = None,
        items_per_feed: int = 20,
        timeout: float = 15.0,
    ) -> None:
        self._feeds = list(DEFAULT_FEEDS if feeds is None else feeds)
        self._items_per_feed = items_per_feed
        self._timeout = timeout

    def fetch(self) -> Iterable[SourceBatch]:
        for feed in self._feeds:
            meta = SourceMeta(name=feed.name, category=feed.category)
            logger.info("Fetching %s...", feed.name)
            try:
                items = self._fetch_feed(feed)
            except Exception as exc:
                logger.warning("Error fetching %s: %s", feed.name, exc)
                yield SourceBatch(meta=meta, error=str(exc) or exc.__class__.__name__)
                continue
            yield SourceBatch(meta=meta, items=items)

    def _fetch_feed(self, feed: FeedSource) -> List[RawItem]:
        response = requests.get(feed.url, headers={"User-Agent": USER_AGENT}, timeout=self._timeout)
        response.raise_for_status()
        parsed = feedparser.parse(response.content)
        entries = parsed.entries or []
        if parsed.get("bozo") and not entries:
            raise ValueError(f"unparseable feed: {parsed.get('bozo_exception')}")
        return [_to_raw_item(entry) for entry in entries[: self._items_per_feed]]


def _to_raw_item(entry: Mapping[str, object]) -> RawItem:
    return RawItem(
        title=_str(entry.get("title")),
        link=_str(entry.get("link")),
        summary=_plain_text(_str(entry.get("summary")) or _get_content(entry)),
        published=_parse_published(entry),
        author=_str(entry.get("author")),
    )


def _str(value: object) -> Optional[str]:
    return value if isinstance(value, str) else None


def _plain_text(html: Optional[str]) -> Optional[str]:
    if not html:
        return html
    return BeautifulSoup(html, "html.parser").get_text(" ", strip=True)


def _get_content(entry: Mapping[str, object]) -> Optional[str]:
    contents = entry.get("content")
    if contents:
        parts: List[str] = []
        for part in contents:
            if isinstance(part, Mapping):
                value = part.get("value")
                if isinstance(value, str):
                    parts.append(value)
        if parts:
            return "\n\n".join(parts)
    return None


def _parse_published(entry: Mapping[str, object]) -> datetime | str | None:
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            try:
                return datetime(*parsed[:6], tzinfo=timezone.utc)
            except (TypeError, ValueError):
                pass
    return _str(entry.get("published")) or _str(entry.get("updated"))
