from .base import BaseProvider
from .mock_provider import MockProvider
from .newsapi_provider import NewsAPIProvider
from .rss_provider import RSSFeedProvider

__all__ = ["BaseProvider", "MockProvider", "NewsAPIProvider", "RSSFeedProvider"]
