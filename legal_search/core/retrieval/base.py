"""
Base class for the retrieval strategies used by hybrid search.
"""
from abc import ABC, abstractmethod
from typing import List

from ..config import SearchConfig
from ..document_store import SectionStore
from ..models.retrieval_models import MatchType, SearchRequest, SearchResult


def clamp_score(score: float) -> float:
    return max(0.0, min(1.0, score))


class RetrievalStrategy(ABC):
    """
    One independent way of finding candidate sections.

    Strategies raise on failure; the caller decides how to degrade.
    """

    match_type: MatchType

    def __init__(self, store: SectionStore, config: SearchConfig):
        self.store = store
        self.config = config

    @abstractmethod
    def is_applicable(self, request: SearchRequest) -> bool:
        """Whether the request carries the input this strategy needs."""
        pass

    @abstractmethod
    async def search(self, request: SearchRequest) -> List[SearchResult]:
        """Return scored candidates for the request."""
        pass

    def candidate_limit(self, request: SearchRequest, cap: int) -> int:
        return request.limit or cap
