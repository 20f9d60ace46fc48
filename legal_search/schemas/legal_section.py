# legal_search/schemas/legal_section.py
from pydantic import BaseModel
from typing import List, Optional

class NumericalValue(BaseModel):
    value: float
    unit: str
    context: Optional[str] = None
    class Config:
        from_attributes = True

class LegalSectionSummary(BaseModel):
    id: str
    section_id: str
    section_number: str
    title: Optional[str] = None
    law_id: str
    status: str

class LegalSectionDetail(LegalSectionSummary):
    chapter_id: Optional[str] = None
    chapter_title: Optional[str] = None
    content: str
    topic_tags: List[str] = []
    key_terms: List[str] = []
    numerical_values: List[NumericalValue] = []
