"""
Result fusion system for combining multiple retrieval strategies.

Scores are additive with a ceiling of 1.0: a section found by several weak
signals can outrank one found by a single strong signal. Contributions are
combined in a canonical order so the outcome does not depend on which
strategy finished first.
"""
from typing import List, Dict, Iterable, Tuple, NamedTuple
import logging

from .base import clamp_score
from ..models.retrieval_models import LegalSection, MatchType, SearchResult, STRATEGY_ORDER

logger = logging.getLogger(__name__)

_STRATEGY_RANK = {match_type: rank for rank, match_type in enumerate(STRATEGY_ORDER)}


class _Contribution(NamedTuple):
    match_types: Tuple[MatchType, ...]
    score: float
    highlights: Tuple[str, ...]
    section: LegalSection

    def sort_key(self):
        ranks = tuple(_STRATEGY_RANK[m] for m in self.match_types)
        return ranks, self.score, self.highlights


class FusedResult:
    """Accumulator for everything the strategies said about one section."""

    def __init__(self, section_id: str, max_highlights: int = 3):
        self.section_id = section_id
        self.max_highlights = max_highlights
        self._contributions: List[_Contribution] = []

    def add(self, result: SearchResult) -> None:
        if result.section.id != self.section_id:
            raise ValueError(f"Cannot fuse section {result.section.id} into {self.section_id}")
        match_types = tuple(sorted(set(result.match_type), key=_STRATEGY_RANK.__getitem__))
        self._contributions.append(
            _Contribution(match_types, result.score, tuple(result.highlights), result.section)
        )

    def merge(self, other: "FusedResult") -> None:
        if other.section_id != self.section_id:
            raise ValueError(f"Cannot fuse section {other.section_id} into {self.section_id}")
        self._contributions.extend(other._contributions)

    def _ordered(self) -> List[_Contribution]:
        return sorted(self._contributions, key=_Contribution.sort_key)

    @property
    def section(self) -> LegalSection:
        return self._ordered()[0].section

    @property
    def score(self) -> float:
        total = 0.0
        for contribution in self._ordered():
            total = min(1.0, total + contribution.score)
        return clamp_score(total)

    @property
    def match_type(self) -> List[MatchType]:
        seen = {m for c in self._contributions for m in c.match_types}
        return [m for m in STRATEGY_ORDER if m in seen]

    @property
    def highlights(self) -> List[str]:
        combined = [h for c in self._ordered() for h in c.highlights]
        return combined[:self.max_highlights]

    def to_result(self) -> SearchResult:
        return SearchResult(
            section=self.section,
            score=self.score,
            match_type=self.match_type,
            highlights=self.highlights,
        )


class ResultFusion:
    """Combines per-strategy candidate lists into one set keyed by section id."""

    def __init__(self, max_highlights: int = 3):
        self.max_highlights = max_highlights

    def merge_result(self, fused: Dict[str, FusedResult], result: SearchResult) -> None:
        """Merge a single candidate into the accumulator map."""
        section_id = result.section.id
        if section_id not in fused:
            fused[section_id] = FusedResult(section_id, self.max_highlights)
        fused[section_id].add(result)

    def fuse_results(self, retrieval_results: Iterable[List[SearchResult]]) -> Dict[str, FusedResult]:
        """Fuse results from multiple retrieval methods."""
        fused: Dict[str, FusedResult] = {}
        candidate_count = 0
        for documents in retrieval_results:
            for result in documents:
                self.merge_result(fused, result)
                candidate_count += 1

        logger.debug(f"Fused {candidate_count} candidates into {len(fused)} sections")
        return fused

    def combine(self, left: Dict[str, FusedResult], right: Dict[str, FusedResult]) -> Dict[str, FusedResult]:
        """Merge two accumulator maps into a new one."""
        combined: Dict[str, FusedResult] = {}
        for source in (left, right):
            for section_id, partial in source.items():
                if section_id not in combined:
                    combined[section_id] = FusedResult(section_id, self.max_highlights)
                combined[section_id].merge(partial)
        return combined
