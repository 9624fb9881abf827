from __future__ import annotations

from datetime import datetime, timezone

from positive_news.models import Candidate

FIXED_NOW = datetime(2026, 3, 1, 6, 0, tzinfo=timezone.utc)


def make_candidate(title="", description="", source_name="Example Source", link="", score=None, category="general"):
    return Candidate(
        title=title,
        link=link,
        description=description,
        published_at=FIXED_NOW,
        source_name=source_name,
        category=category,
        score=score,
    )
