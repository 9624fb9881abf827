from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable

from ..models import RawItem, SourceBatch, SourceMeta
from .base import BaseProvider


class MockProvider(BaseProvider):
    """Returns hard-coded articles for offline development."""

    name = "mock"

    def fetch(self) -> Iterable[SourceBatch]:
        now = datetime.now(timezone.utc)
        yield SourceBatch(
            meta=SourceMeta(name="Good News Network", category="general"),
            items=[
                RawItem(
                    title="Volunteers plant a million trees along the river valley",
                    link="https://example.com/million-trees",
                    summary="A reforestation drive restores habitat for birds and fish.",
                    published=now - timedelta(hours=2),
                ),
                RawItem(
                    title="Town library turns 100 with a community party",
                    link="https://example.com/library-centenary",
                    summary="Residents gathered to celebrate the anniversary.",
                    published=now - timedelta(hours=5),
                ),
            ],
        )
        yield SourceBatch(
            meta=SourceMeta(name="Science Daily Health", category="health"),
            items=[
                RawItem(
                    title="New malaria vaccine shows strong results in trial",
                    link="https://example.com/malaria-vaccine",
                    summary="Researchers report progress toward a breakthrough treatment.",
                    published=(now - timedelta(days=1)).isoformat(),
                ),
                RawItem(
                    title="Hospital warning after outbreak",
                    link="https://example.com/outbreak",
                    summary="Officials fear a crisis as cases rise.",
                    published=None,
                ),
            ],
        )
