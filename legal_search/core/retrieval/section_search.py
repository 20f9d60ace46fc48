"""
Exact section-number search.
"""
import re
from typing import List
import logging

from .base import RetrievalStrategy, clamp_score
from ..models.retrieval_models import MatchType, SearchRequest, SearchResult

logger = logging.getLogger(__name__)


def normalize_section_number(section_number: str) -> str:
    """'Section 28(a)' -> '28(a)'"""
    cleaned = re.sub(r'[^\w.()-]', '', section_number)
    return re.sub(r'section', '', cleaned, count=1, flags=re.IGNORECASE).strip()


class SectionNumberSearchEngine(RetrievalStrategy):
    """Finds sections by their number. Every hit gets the same flat score."""

    match_type = MatchType.SECTION_NUMBER

    def is_applicable(self, request: SearchRequest) -> bool:
        return bool(request.section_numbers)

    async def search(self, request: SearchRequest) -> List[SearchResult]:
        patterns = [p for p in (normalize_section_number(s) for s in request.section_numbers) if p]
        if not patterns:
            logger.info("Section search skipped: nothing left after normalizing section numbers")
            return []

        sections = await self.store.find_by_section_numbers(
            patterns, self.candidate_limit(request, self.config.section_candidate_cap)
        )
        logger.info(f"Section search matched {len(sections)} sections for {patterns}")
        return [
            SearchResult(
                section=section,
                score=clamp_score(self.config.section_number_weight),
                match_type=[MatchType.SECTION_NUMBER],
            )
            for section in sections
        ]
