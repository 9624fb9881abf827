from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional, Sequence

import requests

from ..config import DEFAULT_QUERIES, SearchQuery
from ..models import RawItem, SourceBatch, SourceMeta
from .base import BaseProvider

REMOVED = "[Removed]"

logger = logging.getLogger(__name__)


class NewsAPIProvider(BaseProvider):
    """Runs a set of keyword searches against newsapi.org."""

    BASE_URL = "https://newsapi.org/v2/everything"
    name = "newsapi"

    def __init__(
        self,
        api_key: str,
        queries: Optional[Sequence[SearchQuery]] = None,
        page_size: int = 10,
        timeout: float = 15.0,
    ) -> None:
        if not api_key:
            raise ValueError("NewsAPIProvider requires an API key")
        self._api_key = api_key
        self._queries = list(DEFAULT_QUERIES if queries is None else queries)
        self._page_size = page_size
        self._timeout = timeout

    def fetch(self) -> Iterable[SourceBatch]:
        for query in self._queries:
            meta = SourceMeta(name=f"NewsAPI: {query.query}", category=query.category)
            logger.info("Fetching NewsAPI: %s...", query.query)
            try:
                items = self._search(query.query)
            except Exception as exc:
                logger.warning("Error fetching NewsAPI (%s): %s", query.query, exc)
                yield SourceBatch(meta=meta, error=str(exc) or exc.__class__.__name__)
                continue
            yield SourceBatch(meta=meta, items=items)

    def _search(self, query: str) -> List[RawItem]:
        params = {
            "q": query,
            "pageSize": self._page_size,
            "language": "en",
            "sortBy": "publishedAt",
        }
        response = requests.get(
            self.BASE_URL,
            params=params,
            headers={"Authorization": self._api_key},
            timeout=self._timeout,
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, Mapping):
            raise ValueError(f"unexpected NewsAPI payload: {type(payload).__name__}")
        articles = payload.get("articles") or []
        if not isinstance(articles, list):
            raise ValueError("unexpected NewsAPI articles field")
        items: List[RawItem] = []
        for article in articles:
            if not isinstance(article, Mapping):
                continue
            if article.get("title") == REMOVED or article.get("description") == REMOVED:
                continue
            items.append(
                RawItem(
                    title=article.get("title"),
                    link=article.get("url"),
                    summary=article.get("description"),
                    published=article.get("publishedAt"),
                    source=_source_name(article.get("source")),
                    author=article.get("author"),
                )
            )
        return items


def _source_name(source: object) -> str:
    if isinstance(source, Mapping):
        name = source.get("name")
        if isinstance(name, str) and name.strip():
            return name
    elif isinstance(source, str) and source.strip():
        return source
    return "NewsAPI"
