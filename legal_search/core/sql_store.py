"""
PostgreSQL + pgvector implementation of the section store.
"""
import asyncio
import logging
from typing import List, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, selectinload

from .document_store import SectionStore
from .exceptions import VectorSearchUnavailable
from .models.retrieval_models import (
    LegalSection, NumericalValue, NumericalQuery, SectionStatus,
)
from legal_search.models import legal_section as orm

logger = logging.getLogger(__name__)

# undefined_function / undefined_object: raised when the vector extension is missing
_VECTOR_ERROR_CODES = {"42883", "42704"}


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _is_vector_capability_error(error: DBAPIError) -> bool:
    code = getattr(error.orig, "pgcode", None)
    return code in _VECTOR_ERROR_CODES or "vector" in str(error.orig).lower()


def to_section(row: orm.LegalSection) -> LegalSection:
    """Convert an ORM row (with its law and numerical values) to the domain model."""
    section_id = str(row.id)
    return LegalSection(
        id=section_id,
        section_number=row.section_number,
        title=row.title or "",
        law_id=row.law.law_id,
        law_name=row.law.short_name or row.law.law_id,
        law_type=row.law.law_type,
        chapter_id=row.chapter_id,
        chapter_title=row.chapter_title,
        content=row.content,
        content_plain=row.content_plain,
        topic_tags=row.topic_tags or [],
        status=row.status,
        key_terms=row.key_terms or [],
        numerical_values=[
            NumericalValue(
                value=nv.value,
                unit=nv.unit,
                context=nv.context or "",
                section_id=section_id,
            )
            for nv in row.numerical_values
        ],
    )


class SqlSectionStore(SectionStore):
    """
    Section store backed by SQLAlchemy.

    The ORM session is synchronous, so every call runs in a worker thread
    with its own session.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def nearest_sections(self, embedding: List[float], top_k: int) -> List[Tuple[LegalSection, float]]:
        return await asyncio.to_thread(self._nearest_sections, embedding, top_k)

    async def find_by_section_numbers(self, patterns: List[str], limit: int) -> List[LegalSection]:
        return await asyncio.to_thread(self._find_by_section_numbers, patterns, limit)

    async def find_by_law_ids(self, law_ids: List[str], limit: int) -> List[LegalSection]:
        return await asyncio.to_thread(self._find_by_law_ids, law_ids, limit)

    async def find_by_keywords(self, keywords: List[str], limit: int) -> List[LegalSection]:
        return await asyncio.to_thread(self._find_by_keywords, keywords, limit)

    async def find_numerical_values(self, query: NumericalQuery,
                                    limit: int) -> List[Tuple[NumericalValue, LegalSection]]:
        return await asyncio.to_thread(self._find_numerical_values, query, limit)

    def _current_sections(self, db: Session):
        return (
            db.query(orm.LegalSection)
            .options(selectinload(orm.LegalSection.law), selectinload(orm.LegalSection.numerical_values))
            .filter(orm.LegalSection.status == SectionStatus.CURRENT.value)
        )

    def _nearest_sections(self, embedding: List[float], top_k: int) -> List[Tuple[LegalSection, float]]:
        with self.session_factory() as db:
            distance = orm.LegalSection.embedding.cosine_distance(embedding)
            query = (
                db.query(orm.LegalSection, (1 - distance).label("similarity"))
                .options(selectinload(orm.LegalSection.law), selectinload(orm.LegalSection.numerical_values))
                .filter(
                    orm.LegalSection.embedding.isnot(None),
                    orm.LegalSection.status == SectionStatus.CURRENT.value,
                )
                .order_by(distance)
                .limit(top_k)
            )
            try:
                rows = query.all()
            except DBAPIError as e:
                if _is_vector_capability_error(e):
                    raise VectorSearchUnavailable(f"pgvector is not available: {e.orig}") from e
                raise
            return [(to_section(row), float(similarity)) for row, similarity in rows]

    def _find_by_section_numbers(self, patterns: List[str], limit: int) -> List[LegalSection]:
        with self.session_factory() as db:
            rows = (
                self._current_sections(db)
                .filter(or_(*[
                    orm.LegalSection.section_number.ilike(_like_pattern(p), escape="\\") for p in patterns
                ]))
                .order_by(orm.LegalSection.section_number, orm.LegalSection.id)
                .limit(limit)
                .all()
            )
            return [to_section(row) for row in rows]

    def _find_by_law_ids(self, law_ids: List[str], limit: int) -> List[LegalSection]:
        with self.session_factory() as db:
            rows = (
                self._current_sections(db)
                .join(orm.Law, orm.LegalSection.law_pk == orm.Law.id)
                .filter(orm.Law.law_id.in_(law_ids))
                .order_by(orm.LegalSection.section_number, orm.LegalSection.id)
                .limit(limit)
                .all()
            )
            return [to_section(row) for row in rows]

    def _find_by_keywords(self, keywords: List[str], limit: int) -> List[LegalSection]:
        with self.session_factory() as db:
            rows = (
                self._current_sections(db)
                .filter(or_(*[
                    orm.LegalSection.content_plain.ilike(_like_pattern(k), escape="\\") for k in keywords
                ]))
                .order_by(orm.LegalSection.section_number, orm.LegalSection.id)
                .limit(limit)
                .all()
            )
            return [to_section(row) for row in rows]

    def _find_numerical_values(self, query: NumericalQuery,
                               limit: int) -> List[Tuple[NumericalValue, LegalSection]]:
        value_column = orm.NumericalValue.value
        if query.operator == "exact":
            condition = value_column == query.value
        elif query.operator == "minimum":
            condition = value_column >= query.value
        elif query.operator == "maximum":
            condition = value_column <= query.value
        else:
            upper = query.range_max if query.range_max is not None else query.value * 2
            condition = value_column.between(query.value, upper)

        with self.session_factory() as db:
            db_query = (
                db.query(orm.NumericalValue)
                .join(orm.LegalSection, orm.NumericalValue.section_pk == orm.LegalSection.id)
                .options(
                    selectinload(orm.NumericalValue.section).selectinload(orm.LegalSection.law),
                    selectinload(orm.NumericalValue.section).selectinload(orm.LegalSection.numerical_values),
                )
                .filter(condition, orm.LegalSection.status == SectionStatus.CURRENT.value)
            )
            if query.unit:
                db_query = db_query.filter(orm.NumericalValue.unit == query.unit)

            rows = db_query.order_by(orm.NumericalValue.id).limit(limit).all()
            results = []
            for row in rows:
                section = to_section(row.section)
                value = NumericalValue(
                    value=row.value,
                    unit=row.unit,
                    context=row.context or "",
                    section_id=section.id,
                )
                results.append((value, section))
            return results
