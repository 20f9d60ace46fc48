"""
Data models for query analysis.
"""
from pydantic import BaseModel
from typing import List, Optional, Literal

from .retrieval_models import NumericalQuery


class LegalReference(BaseModel):
    type: Literal["ra", "rule", "section", "do", "la"]
    identifier: str      # "11058", "1030", "28(a)"
    full_reference: str  # "RA 11058", "Rule 1030", "Section 28(a)"


class QueryAnalysis(BaseModel):
    keywords: List[str] = []
    legal_references: List[LegalReference] = []
    numerical_query: Optional[NumericalQuery] = None
