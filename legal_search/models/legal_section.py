# legal_search/models/legal_section.py
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, Float, ForeignKey
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector
import uuid

from legal_search.db.base import Base
from legal_search.core.config import EMBEDDING_DIMENSIONS

class Law(Base):
    __tablename__ = 'laws'
    id = Column(Integer, primary_key=True, index=True)
    law_id = Column(String(50), nullable=False, unique=True, index=True) # 'ra11058', 'rule1030', 'do252'
    law_type = Column(String(20), nullable=False) # classified at ingestion: 'ra', 'oshs_rule', 'do', 'la', 'da'
    name = Column(String(255), nullable=False)
    short_name = Column(String(100))
    title = Column(Text)
    status = Column(String(20), nullable=False, default='current')
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    sections = relationship("LegalSection", back_populates="law")


class LegalSection(Base):
    __tablename__ = 'legal_sections'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    section_id = Column(String(100), nullable=False, unique=True) # 'ra11058-s28-p1'
    section_number = Column(String(100), nullable=False, index=True)
    title = Column(String(255))
    law_pk = Column('law_id', Integer, ForeignKey('laws.id'), nullable=False)
    chapter_id = Column(String(100))
    chapter_title = Column(String(255))
    content = Column(Text, nullable=False)
    content_plain = Column(Text, nullable=False)
    topic_tags = Column(ARRAY(String), default=list)
    status = Column(String(20), nullable=False, default='current', index=True)
    key_terms = Column(ARRAY(String), default=list)
    # Requires CREATE EXTENSION vector; maintained by ingestion only
    embedding = Column(Vector(EMBEDDING_DIMENSIONS), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    law = relationship("Law", back_populates="sections")
    numerical_values = relationship("NumericalValue", back_populates="section")


class NumericalValue(Base):
    __tablename__ = 'numerical_values'
    id = Column(Integer, primary_key=True, index=True)
    section_pk = Column('section_id', UUID(as_uuid=True), ForeignKey('legal_sections.id'), nullable=False)
    value = Column(Float, nullable=False, index=True)
    unit = Column(String(20), nullable=False) # 'PHP', 'hours', 'days', 'workers', 'percent'
    context = Column(Text)

    section = relationship("LegalSection", back_populates="numerical_values")
