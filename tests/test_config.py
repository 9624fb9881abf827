import os
import unittest
from unittest import mock

from positive_news.config import DEFAULT_FEEDS, DEFAULT_QUERIES, TRUSTED_SOURCES, PipelineConfig


class TestPipelineConfig(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = PipelineConfig.from_env()
        self.assertIsNone(config.newsapi_key)
        self.assertEqual(config.max_candidates, 100)
        self.assertEqual(config.fetch_timeout, 15.0)
        self.assertEqual(config.items_per_feed, 20)
        self.assertEqual(config.scoring.trusted_sources, TRUSTED_SOURCES)
        self.assertEqual(config.matching.overlap_threshold, 0.7)
        self.assertEqual(len(config.feeds), len(DEFAULT_FEEDS))
        self.assertEqual(len(config.queries), len(DEFAULT_QUERIES))

    def test_environment_overrides(self):
        env = {
            "NEWS_API_KEY": "secret",
            "POSITIVE_NEWS_MAX_CANDIDATES": "25",
            "POSITIVE_NEWS_FETCH_TIMEOUT": "5",
            "POSITIVE_NEWS_ARCHIVE_PATH": "/tmp/archive.json",
            "POSITIVE_NEWS_TRUSTED_SOURCES": "Positive News, Nature ,",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = PipelineConfig.from_env()
        self.assertEqual(config.newsapi_key, "secret")
        self.assertEqual(config.max_candidates, 25)
        self.assertEqual(config.fetch_timeout, 5.0)
        self.assertEqual(config.archive_path, "/tmp/archive.json")
        self.assertEqual(config.scoring.trusted_sources, frozenset({"Positive News", "Nature"}))

    def test_invalid_integer(self):
        with mock.patch.dict(os.environ, {"POSITIVE_NEWS_MAX_CANDIDATES": "lots"}, clear=True):
            with self.assertRaisesRegex(ValueError, "POSITIVE_NEWS_MAX_CANDIDATES"):
                PipelineConfig.from_env()

    def test_negative_integer(self):
        with mock.patch.dict(os.environ, {"POSITIVE_NEWS_ITEMS_PER_FEED": "-1"}, clear=True):
            with self.assertRaises(ValueError):
                PipelineConfig.from_env()


if __name__ == "__main__":
    unittest.main()
