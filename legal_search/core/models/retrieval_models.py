"""
Data models for legal sections, search requests and fused search results.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal
from enum import Enum


class LawType(str, Enum):
    RA = "ra"                # Republic Act
    OSHS_RULE = "oshs_rule"  # OSH Standards rule
    DO = "do"                # Department Order
    LA = "la"                # Labor Advisory
    DA = "da"                # Department Advisory


class SectionStatus(str, Enum):
    CURRENT = "current"
    AMENDED = "amended"
    SUPERSEDED = "superseded"
    REPEALED = "repealed"


class MatchType(str, Enum):
    VECTOR = "vector"
    SECTION_NUMBER = "section_number"
    LAW_ID = "law_id"
    KEYWORD = "keyword"
    NUMERICAL = "numerical"


# Dispatch order of the retrieval strategies; also the canonical fusion order.
STRATEGY_ORDER: List[MatchType] = [
    MatchType.VECTOR,
    MatchType.SECTION_NUMBER,
    MatchType.LAW_ID,
    MatchType.KEYWORD,
    MatchType.NUMERICAL,
]


class NumericalValue(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    value: float
    unit: str
    context: str = ""
    section_id: str


class LegalSection(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    section_number: str
    title: str = ""
    law_id: str
    law_name: str = ""
    law_type: LawType
    chapter_id: Optional[str] = None
    chapter_title: Optional[str] = None
    content: str
    content_plain: str
    topic_tags: List[str] = []
    status: SectionStatus = SectionStatus.CURRENT
    key_terms: List[str] = []
    numerical_values: List[NumericalValue] = []


class NumericalQuery(BaseModel):
    value: float
    unit: Optional[str] = None
    operator: Literal["exact", "minimum", "maximum", "range"] = "exact"
    range_max: Optional[float] = None

    def matches(self, value: float) -> bool:
        """Check a stored value against this query's operator."""
        if self.operator == "exact":
            return value == self.value
        if self.operator == "minimum":
            return value >= self.value
        if self.operator == "maximum":
            return value <= self.value
        # range: an unset upper bound defaults to twice the lower bound
        upper = self.range_max if self.range_max is not None else self.value * 2
        return self.value <= value <= upper


class SearchRequest(BaseModel):
    query: Optional[str] = None
    embedding: Optional[List[float]] = None
    section_numbers: List[str] = []
    law_ids: List[str] = []
    numerical_query: Optional[NumericalQuery] = None
    min_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    limit: Optional[int] = Field(default=None, ge=1)


class SearchResult(BaseModel):
    section: LegalSection
    score: float = Field(ge=0.0, le=1.0)
    match_type: List[MatchType]
    highlights: List[str] = []


class HybridSearchResult(BaseModel):
    results: List[SearchResult]
    total_found: int
    elapsed_ms: float
    strategies_used: List[MatchType] = []
    strategies_failed: List[MatchType] = []
    strategies_timed_out: List[MatchType] = []

    @property
    def strategies_succeeded(self) -> List[MatchType]:
        unsuccessful = set(self.strategies_failed) | set(self.strategies_timed_out)
        return [s for s in self.strategies_used if s not in unsuccessful]
