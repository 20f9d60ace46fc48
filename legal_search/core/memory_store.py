"""
In-memory section store for tests and offline runs.
"""
from typing import List, Dict, Optional, Tuple, Iterable
import logging

import numpy as np

from .document_store import SectionStore
from .exceptions import VectorSearchUnavailable
from .models.retrieval_models import LegalSection, NumericalQuery, NumericalValue, SectionStatus

logger = logging.getLogger(__name__)


def cosine_similarity(a, b) -> float:
    """Cosine similarity between two vectors; 0.0 when either is all zeros."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise ValueError("Embeddings must have same dimensions")
    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0:
        return 0.0
    return float(np.dot(a, b) / norm)


class InMemorySectionStore(SectionStore):
    """Keeps sections and their embeddings in process memory."""

    def __init__(self, sections: Iterable[LegalSection],
                 embeddings: Optional[Dict[str, List[float]]] = None,
                 vector_enabled: bool = True):
        self.sections = list(sections)
        self.embeddings = {
            section_id: np.asarray(vector, dtype=float)
            for section_id, vector in (embeddings or {}).items()
        }
        self.vector_enabled = vector_enabled

    def _current(self) -> List[LegalSection]:
        return [s for s in self.sections if s.status == SectionStatus.CURRENT]

    async def nearest_sections(self, embedding: List[float], top_k: int) -> List[Tuple[LegalSection, float]]:
        if not self.vector_enabled:
            raise VectorSearchUnavailable("Vector similarity is not enabled for this store")

        scored = []
        for section in self._current():
            vector = self.embeddings.get(section.id)
            if vector is None:
                continue
            scored.append((section, cosine_similarity(embedding, vector)))

        # Highest similarity first, i.e. ascending cosine distance
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored[:top_k]

    async def find_by_section_numbers(self, patterns: List[str], limit: int) -> List[LegalSection]:
        lowered = [p.lower() for p in patterns]
        matches = [
            s for s in self._current()
            if any(p in s.section_number.lower() for p in lowered)
        ]
        return matches[:limit]

    async def find_by_law_ids(self, law_ids: List[str], limit: int) -> List[LegalSection]:
        wanted = set(law_ids)
        return [s for s in self._current() if s.law_id in wanted][:limit]

    async def find_by_keywords(self, keywords: List[str], limit: int) -> List[LegalSection]:
        lowered = [k.lower() for k in keywords]
        matches = [
            s for s in self._current()
            if any(k in s.content_plain.lower() for k in lowered)
        ]
        return matches[:limit]

    async def find_numerical_values(self, query: NumericalQuery,
                                    limit: int) -> List[Tuple[NumericalValue, LegalSection]]:
        matches = []
        for section in self._current():
            for numerical_value in section.numerical_values:
                if query.unit and numerical_value.unit != query.unit:
                    continue
                if query.matches(numerical_value.value):
                    matches.append((numerical_value, section))
        return matches[:limit]
