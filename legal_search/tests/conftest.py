"""
Shared fixtures: a small OSH corpus served from the in-memory store.
"""
import pytest

from legal_search.core.config import SearchConfig
from legal_search.core.hybrid_search import HybridSearchService
from legal_search.core.memory_store import InMemorySectionStore
from legal_search.core.models.retrieval_models import (
    LawType, LegalSection, NumericalValue, SectionStatus,
)


@pytest.fixture
def section_factory():
    """Builds LegalSection objects with sensible defaults."""
    def _make(section_id, section_number, law_id, content,
              law_type=LawType.OSHS_RULE, status=SectionStatus.CURRENT,
              numerical_values=(), title=""):
        return LegalSection(
            id=section_id,
            section_number=section_number,
            title=title,
            law_id=law_id,
            law_name=law_id.upper(),
            law_type=law_type,
            content=content,
            content_plain=content,
            status=status,
            numerical_values=[
                NumericalValue(value=value, unit=unit, context=context, section_id=section_id)
                for value, unit, context in numerical_values
            ],
        )
    return _make


@pytest.fixture
def corpus(section_factory):
    return [
        section_factory(
            "ra11058-s28", "Section 28", "ra11058",
            "Employers who willfully fail to comply shall be liable to an administrative fine "
            "of up to one hundred thousand pesos per day until the violation is corrected.",
            law_type=LawType.RA,
            numerical_values=[(100000, "PHP", "administrative fine per day of violation")],
        ),
        section_factory(
            "rule1030-1033.01", "1033.01", "rule1030",
            "Safety Officer training. The Safety Officer shall complete the mandatory 40 hours "
            "of training on occupational safety and health. Records of attendance must be kept "
            "by the employer.",
            numerical_values=[(40, "hours", "mandatory safety officer training")],
        ),
        section_factory(
            "rule1040-1043.01", "1043.01", "rule1040",
            "Every workplace shall organize a health and safety committee. The committee shall "
            "meet at least once a month to review the safety program of the establishment.",
            numerical_values=[(50, "workers", "committee required for establishments of this size")],
        ),
        section_factory(
            "rule1030-1033.02-old", "1033.02", "rule1030",
            "Repealed: the Safety Officer training hours were previously set by the Bureau.",
            status=SectionStatus.REPEALED,
            numerical_values=[(40, "hours", "repealed training requirement")],
        ),
        section_factory(
            "do252-s5", "Section 5", "do252",
            "Employers shall submit the annual medical report within 30 calendar days after "
            "the end of the year.",
            law_type=LawType.DO,
            numerical_values=[(30, "days", "deadline for the annual medical report")],
        ),
    ]


@pytest.fixture
def embeddings():
    return {
        "ra11058-s28": [1.0, 0.0, 0.0],
        "rule1030-1033.01": [0.0, 1.0, 0.0],
        "rule1040-1043.01": [0.0, 0.8, 0.6],
        "rule1030-1033.02-old": [0.0, 1.0, 0.0],
        "do252-s5": [0.0, 0.0, 1.0],
    }


@pytest.fixture
def store(corpus, embeddings):
    return InMemorySectionStore(corpus, embeddings)


@pytest.fixture
def config():
    return SearchConfig()


@pytest.fixture
def search_service(store, config):
    return HybridSearchService(store, config=config)
