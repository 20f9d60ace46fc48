"""
Numerical value search (amounts, hours, headcounts, days).
"""
from typing import List
import logging

from .base import RetrievalStrategy, clamp_score
from ..models.retrieval_models import MatchType, NumericalValue, SearchRequest, SearchResult

logger = logging.getLogger(__name__)


def format_numerical_value(value: NumericalValue) -> str:
    """'100000 PHP - penalty for first offense'"""
    number = int(value.value) if float(value.value).is_integer() else value.value
    return f"{number} {value.unit} - {value.context}"


class NumericalSearchEngine(RetrievalStrategy):
    """One result per matching numerical value; exact matches score highest."""

    match_type = MatchType.NUMERICAL

    def is_applicable(self, request: SearchRequest) -> bool:
        return request.numerical_query is not None

    async def search(self, request: SearchRequest) -> List[SearchResult]:
        query = request.numerical_query
        matches = await self.store.find_numerical_values(
            query, self.candidate_limit(request, self.config.numerical_candidate_cap)
        )

        score = self.config.numerical_weight
        if query.operator != "exact":
            score *= self.config.non_exact_numerical_factor

        logger.info(f"Numerical search matched {len(matches)} values ({query.operator} {query.value} {query.unit or ''})")
        return [
            SearchResult(
                section=section,
                score=clamp_score(score),
                match_type=[MatchType.NUMERICAL],
                highlights=[format_numerical_value(value)],
            )
            for value, section in matches
        ]
