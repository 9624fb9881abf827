from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Union

from .config import CATEGORIES, DEFAULT_CATEGORY
from .models import Candidate, RawItem, SourceMeta


def normalize(raw: RawItem, meta: SourceMeta, now: Optional[datetime] = None) -> Candidate:
    """Convert a source item into a ``Candidate``.

    Never raises: missing text fields become empty strings and a missing or
    unparseable timestamp falls back to ``now`` (the fetch time).
    """
    fetched_at = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    return Candidate(
        title=_text(raw.title),
        link=_text(raw.link),
        description=_text(raw.summary),
        published_at=_parse_published(raw.published) or fetched_at,
        source_name=_text(raw.source) or _text(meta.name),
        category=_category(meta.category),
        author=_text(raw.author) or None,
    )


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _category(value: Optional[str]) -> str:
    category = _text(value).lower()
    return category if category in CATEGORIES else DEFAULT_CATEGORY


def _parse_published(value: Union[datetime, str, None]) -> Optional[datetime]:
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    try:
        return _as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        pass
    try:
        return _as_utc(parsedate_to_datetime(value))
    except (TypeError, ValueError, IndexError):
        return None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
