"""
Law/act filter. A coarse signal meant to corroborate the other strategies.
"""
from typing import List
import logging

from .base import RetrievalStrategy, clamp_score
from ..models.retrieval_models import MatchType, SearchRequest, SearchResult

logger = logging.getLogger(__name__)


class LawFilterEngine(RetrievalStrategy):

    match_type = MatchType.LAW_ID

    def is_applicable(self, request: SearchRequest) -> bool:
        return bool(request.law_ids)

    async def search(self, request: SearchRequest) -> List[SearchResult]:
        sections = await self.store.find_by_law_ids(
            request.law_ids, self.candidate_limit(request, self.config.law_candidate_cap)
        )
        logger.info(f"Law filter matched {len(sections)} sections for {request.law_ids}")
        return [
            SearchResult(
                section=section,
                score=clamp_score(self.config.law_id_score),
                match_type=[MatchType.LAW_ID],
            )
            for section in sections
        ]
