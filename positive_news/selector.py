from __future__ import annotations

from typing import Iterable, List

from .models import Candidate


def select(candidates: Iterable[Candidate], max_count: int) -> List[Candidate]:
    """Return the ``max_count`` best-scoring candidates.

    ``sorted`` is stable with ``reverse=True``, so equal scores keep their
    input order.
    """
    ranked = sorted(candidates, key=lambda candidate: candidate.score or 0, reverse=True)
    return ranked[: max(max_count, 0)]
