# legal_search/crud/crud_legal_section.py
import uuid
from typing import Optional
from sqlalchemy.orm import Session, selectinload
from legal_search.models.legal_section import Law, LegalSection

def get_section(db: Session, section_id: str) -> Optional[LegalSection]:
    """
    Fetches a single section by its UUID or by its ingestion id (e.g. 'ra11058-s28-p1').
    """
    query = db.query(LegalSection).options(
        selectinload(LegalSection.law), selectinload(LegalSection.numerical_values)
    )
    try:
        return query.filter(LegalSection.id == uuid.UUID(section_id)).first()
    except ValueError:
        return query.filter(LegalSection.section_id == section_id).first()

def get_sections(db: Session, skip: int = 0, limit: int = 100, law_id: Optional[str] = None):
    """
    Fetches a list of sections with pagination, optionally for one law.
    """
    query = db.query(LegalSection).options(selectinload(LegalSection.law))
    if law_id:
        query = query.join(Law, LegalSection.law_pk == Law.id).filter(Law.law_id == law_id)
    return query.order_by(LegalSection.section_number).offset(skip).limit(limit).all()
