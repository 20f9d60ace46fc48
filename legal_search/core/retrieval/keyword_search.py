"""
Keyword search over the plain text of legal sections.
"""
import re
from typing import List
import logging

from .base import RetrievalStrategy, clamp_score
from ..models.retrieval_models import MatchType, SearchRequest, SearchResult
from ..query_analyzer import extract_keywords

logger = logging.getLogger(__name__)


def extract_highlights(content: str, keywords: List[str], max_highlights: int = 2) -> List[str]:
    """Sentences mentioning a keyword, in source order, between 20 and 200 characters."""
    highlights = []
    if not keywords:
        return highlights

    for sentence in re.split(r'[.!?]+', content):
        sentence_lower = sentence.lower()
        if any(keyword in sentence_lower for keyword in keywords):
            trimmed = sentence.strip()
            if 20 < len(trimmed) < 200:
                highlights.append(trimmed)
        if len(highlights) >= max_highlights:
            break

    return highlights


class KeywordSearchEngine(RetrievalStrategy):
    """Scores sections by the share of query keywords found in their text."""

    match_type = MatchType.KEYWORD

    def is_applicable(self, request: SearchRequest) -> bool:
        return bool(request.query)

    async def search(self, request: SearchRequest) -> List[SearchResult]:
        keywords = extract_keywords(request.query)
        if not keywords:
            logger.info("Keyword search skipped: no usable keywords in query")
            return []

        sections = await self.store.find_by_keywords(
            keywords, self.candidate_limit(request, self.config.keyword_candidate_cap)
        )

        results = []
        for section in sections:
            content_lower = section.content_plain.lower()
            match_count = sum(1 for keyword in keywords if keyword in content_lower)
            match_ratio = match_count / len(keywords)
            results.append(SearchResult(
                section=section,
                score=clamp_score(match_ratio * self.config.keyword_weight),
                match_type=[MatchType.KEYWORD],
                highlights=extract_highlights(
                    section.content_plain, keywords, self.config.max_keyword_highlights
                ),
            ))

        logger.info(f"Keyword search returned {len(results)} sections for {len(keywords)} keywords")
        return results
