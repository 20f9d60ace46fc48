# legal_search/api/v1/endpoints/sections.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from legal_search.schemas.legal_section import LegalSectionSummary, LegalSectionDetail, NumericalValue
from legal_search.crud.crud_legal_section import get_section as get_section_crud, get_sections as get_sections_crud
from legal_search.db.session import get_db

router = APIRouter()

def _summary_fields(section) -> dict:
    return {
        "id": str(section.id),
        "section_id": section.section_id,
        "section_number": section.section_number,
        "title": section.title,
        "law_id": section.law.law_id,
        "status": section.status,
    }

@router.get("/", response_model=List[LegalSectionSummary])
def read_sections(skip: int = 0, limit: int = 100, law_id: Optional[str] = None, db: Session = Depends(get_db)):
    sections = get_sections_crud(db, skip=skip, limit=limit, law_id=law_id)
    return [LegalSectionSummary(**_summary_fields(s)) for s in sections]

@router.get("/{section_id}", response_model=LegalSectionDetail)
def read_section(section_id: str, db: Session = Depends(get_db)):
    section = get_section_crud(db, section_id)
    if section is None:
        raise HTTPException(status_code=404, detail=f"Section {section_id} not found.")
    return LegalSectionDetail(
        **_summary_fields(section),
        chapter_id=section.chapter_id,
        chapter_title=section.chapter_title,
        content=section.content,
        topic_tags=section.topic_tags or [],
        key_terms=section.key_terms or [],
        numerical_values=[NumericalValue.model_validate(nv) for nv in section.numerical_values],
    )
