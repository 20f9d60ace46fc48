"""
Vector search implementation for semantic similarity retrieval.
"""
from typing import List
import logging

from .base import RetrievalStrategy, clamp_score
from .keyword_search import extract_highlights
from ..models.retrieval_models import MatchType, SearchRequest, SearchResult
from ..query_analyzer import extract_keywords

logger = logging.getLogger(__name__)


class VectorSearchEngine(RetrievalStrategy):
    """Handles semantic similarity search using the store's vector index."""

    match_type = MatchType.VECTOR

    def is_applicable(self, request: SearchRequest) -> bool:
        return bool(request.embedding)

    async def search(self, request: SearchRequest) -> List[SearchResult]:
        """Perform vector similarity search."""
        limit = request.limit or self.config.default_limit
        matches = await self.store.nearest_sections(request.embedding, top_k=limit * 2)

        keywords = extract_keywords(request.query) if request.query else []

        documents = []
        for section, similarity in matches:
            if similarity < self.config.min_vector_similarity:
                continue
            documents.append(SearchResult(
                section=section,
                score=clamp_score(similarity * self.config.vector_weight),
                match_type=[MatchType.VECTOR],
                highlights=extract_highlights(
                    section.content_plain, keywords, self.config.max_keyword_highlights
                ),
            ))

        logger.info(f"Vector search kept {len(documents)} of {len(matches)} nearest sections")
        return documents
