"""
Read-only document store interface consumed by the retrieval strategies.
"""
from abc import ABC, abstractmethod
from typing import List, Tuple

from .models.retrieval_models import LegalSection, NumericalQuery, NumericalValue


class SectionStore(ABC):
    """
    Source of current legal sections for retrieval.

    Implementations only ever return sections whose status is current.
    """

    @abstractmethod
    async def nearest_sections(self, embedding: List[float], top_k: int) -> List[Tuple[LegalSection, float]]:
        """
        Return up to top_k sections ordered by ascending cosine distance,
        each paired with its cosine similarity.

        Raises:
            VectorSearchUnavailable: if the store cannot compare vectors
        """
        pass

    @abstractmethod
    async def find_by_section_numbers(self, patterns: List[str], limit: int) -> List[LegalSection]:
        """Sections whose number contains any pattern, case-insensitively."""
        pass

    @abstractmethod
    async def find_by_law_ids(self, law_ids: List[str], limit: int) -> List[LegalSection]:
        """Sections owned by any of the given laws."""
        pass

    @abstractmethod
    async def find_by_keywords(self, keywords: List[str], limit: int) -> List[LegalSection]:
        """Sections whose plain text contains any keyword, case-insensitively."""
        pass

    @abstractmethod
    async def find_numerical_values(self, query: NumericalQuery,
                                    limit: int) -> List[Tuple[NumericalValue, LegalSection]]:
        """Numerical values satisfying the query, joined to their owning section."""
        pass
