# legal_search/schemas/search.py
from pydantic import BaseModel, Field
from typing import List, Optional

from legal_search.core.models.query_models import QueryAnalysis
from legal_search.core.models.retrieval_models import MatchType, NumericalQuery, SearchResult

class SearchQuery(BaseModel):
    query: Optional[str] = None
    embedding: Optional[List[float]] = None
    section_numbers: List[str] = []
    law_ids: List[str] = []
    numerical_query: Optional[NumericalQuery] = None
    min_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    limit: Optional[int] = Field(default=None, ge=1, le=50)
    analyze: bool = True  # extract references and amounts from the query text

class AnalyzeRequest(BaseModel):
    query: str

class SearchResponse(BaseModel):
    results: List[SearchResult]
    total_found: int
    elapsed_ms: float
    strategies_used: List[MatchType]
    strategies_failed: List[MatchType] = []
    strategies_timed_out: List[MatchType] = []
    strategies_succeeded: List[MatchType] = []
    analysis: Optional[QueryAnalysis] = None
