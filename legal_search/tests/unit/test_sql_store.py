import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import DBAPIError

from legal_search.core.exceptions import VectorSearchUnavailable
from legal_search.core.models.retrieval_models import LawType, SectionStatus
from legal_search.core.sql_store import (
    SqlSectionStore, _is_vector_capability_error, _like_pattern, to_section,
)
from legal_search.models import legal_section as orm


class FakePgError(Exception):
    def __init__(self, message, pgcode=None):
        super().__init__(message)
        self.pgcode = pgcode


def _db_error(message, pgcode=None):
    return DBAPIError("SELECT 1", None, FakePgError(message, pgcode))


@pytest.fixture
def orm_section():
    law = orm.Law(law_id="ra11058", law_type="ra", name="Republic Act No. 11058", short_name="RA 11058")
    return orm.LegalSection(
        id=uuid.UUID("6f1c2a7e-0000-4000-8000-000000000028"),
        section_id="ra11058-s28",
        section_number="Section 28",
        title="Penalties",
        law=law,
        content="<p>Employers who willfully fail to comply shall be liable.</p>",
        content_plain="Employers who willfully fail to comply shall be liable.",
        status="current",
        numerical_values=[orm.NumericalValue(value=100000.0, unit="PHP", context=None)],
    )


def _session_factory(session):
    factory = MagicMock()
    factory.return_value.__enter__.return_value = session
    return factory


def _nearest_query(session):
    return session.query.return_value.options.return_value.filter.return_value.order_by.return_value.limit.return_value


def test_to_section_flattens_law_and_values(orm_section):
    section = to_section(orm_section)

    assert section.id == "6f1c2a7e-0000-4000-8000-000000000028"
    assert section.law_id == "ra11058"
    assert section.law_name == "RA 11058"
    assert section.law_type == LawType.RA
    assert section.status == SectionStatus.CURRENT
    assert section.topic_tags == []
    assert len(section.numerical_values) == 1
    value = section.numerical_values[0]
    assert value.value == 100000.0
    assert value.context == ""
    assert value.section_id == section.id


def test_like_pattern_escapes_wildcards():
    assert _like_pattern("28") == "%28%"
    assert _like_pattern("10%_off") == "%10\\%\\_off%"


@pytest.mark.parametrize("message, pgcode, expected", [
    ("operator does not exist: vector <=> vector", "42883", True),
    ('type "vector" does not exist', "42704", True),
    ("could not load library vector.so", None, True),
    ("server closed the connection unexpectedly", "08006", False),
])
def test_vector_capability_errors(message, pgcode, expected):
    assert _is_vector_capability_error(_db_error(message, pgcode)) is expected


@pytest.mark.asyncio
async def test_nearest_sections_returns_similarities(orm_section):
    session = MagicMock()
    _nearest_query(session).all.return_value = [(orm_section, 0.92)]
    store = SqlSectionStore(_session_factory(session))

    matches = await store.nearest_sections([0.1, 0.2, 0.3], top_k=10)

    assert [(s.id, score) for s, score in matches] == [(str(orm_section.id), 0.92)]
    session.query.return_value.options.return_value.filter.return_value.order_by.return_value.limit.assert_called_once_with(10)


@pytest.mark.asyncio
async def test_missing_vector_extension_is_reported_as_unavailable():
    session = MagicMock()
    _nearest_query(session).all.side_effect = _db_error("operator does not exist: vector <=> vector", "42883")
    store = SqlSectionStore(_session_factory(session))

    with pytest.raises(VectorSearchUnavailable):
        await store.nearest_sections([0.1, 0.2, 0.3], top_k=10)


@pytest.mark.asyncio
async def test_other_database_errors_propagate():
    session = MagicMock()
    _nearest_query(session).all.side_effect = _db_error("server closed the connection unexpectedly", "08006")
    store = SqlSectionStore(_session_factory(session))

    with pytest.raises(DBAPIError):
        await store.nearest_sections([0.1, 0.2, 0.3], top_k=10)
