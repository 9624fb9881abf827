from __future__ import annotations

from typing import Optional

from .config import ScoringConfig
from .models import Candidate


class PositivityScorer:
    """Keyword heuristic for how upbeat a candidate reads.

    Each negative keyword found anywhere in the title or description costs
    ``negative_penalty`` and each positive keyword earns ``positive_reward``,
    counted once per keyword regardless of how often it occurs. Trusted
    sources get ``trust_bonus`` on top.
    """

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or ScoringConfig()
        self._positive = tuple(keyword.lower() for keyword in self.config.positive_keywords)
        self._negative = tuple(keyword.lower() for keyword in self.config.negative_keywords)

    def score(self, candidate: Candidate) -> int:
        text = f"{candidate.title} {candidate.description}".lower()
        score = 0
        for keyword in self._negative:
            if keyword in text:
                score -= self.config.negative_penalty
        for keyword in self._positive:
            if keyword in text:
                score += self.config.positive_reward
        if self.is_trusted(candidate):
            score += self.config.trust_bonus
        return score

    def is_trusted(self, candidate: Candidate) -> bool:
        return candidate.source_name in self.config.trusted_sources

    def qualifies(self, candidate: Candidate, score: Optional[int] = None) -> bool:
        # Trusted sources pass regardless of score.
        if score is None:
            score = candidate.score if candidate.score is not None else self.score(candidate)
        return score > 0 or self.is_trusted(candidate)

    def apply(self, candidate: Candidate) -> int:
        if candidate.score is not None:
            raise ValueError(f"Candidate already scored: {candidate.title!r}")
        candidate.score = self.score(candidate)
        return candidate.score
