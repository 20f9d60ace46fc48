"""
Query analysis: turns free text into structured search hints.

Everything here is a best-effort regex scan, not a grammar. Malformed or
missing patterns simply produce fewer hints.
"""
import re
from typing import List, Optional, Iterable
import logging

from .models.query_models import LegalReference, QueryAnalysis
from .models.retrieval_models import NumericalQuery, SearchRequest

logger = logging.getLogger(__name__)

STOP_WORDS = {
    'what', 'is', 'the', 'a', 'an', 'of', 'in', 'to', 'for', 'and', 'or',
    'how', 'many', 'much', 'does', 'do', 'are', 'if', 'when', 'where', 'who',
    # Filipino
    'ano', 'ang', 'ng', 'sa', 'para', 'kung', 'paano', 'sino', 'saan',
}

# (type, pattern) pairs, scanned in this order
_REFERENCE_PATTERNS = [
    ("ra", re.compile(r'\b(?:RA|R\.A\.?|Republic\s*Act)\s*(?:No\.?\s*)?(\d+)', re.IGNORECASE)),
    ("rule", re.compile(r'\bRule\s*(\d{4})', re.IGNORECASE)),
    ("section", re.compile(r'\bSection\s*(\d+(?:\.\d+)?(?:\([a-z]\))?)', re.IGNORECASE)),
    ("do", re.compile(r'\bDO\s*(\d+)', re.IGNORECASE)),
    ("la", re.compile(r'\bLA\s*(\d+)', re.IGNORECASE)),
]

_REFERENCE_LABELS = {
    "ra": "RA",
    "rule": "Rule",
    "section": "Section",
    "do": "DO",
    "la": "LA",
}

_CURRENCY_PATTERN = re.compile(r'(?:\bPHP|\bP|₱)\s*([\d,]+(?:\.\d{2})?)', re.IGNORECASE)

# (unit, pattern) pairs tried after the currency pattern, in priority order
_COUNT_PATTERNS = [
    ("hours", re.compile(r'(\d+)\s*(?:hours?|hrs?)', re.IGNORECASE)),
    ("workers", re.compile(r'(\d+)\s*(?:workers?|employees?)', re.IGNORECASE)),
    ("days", re.compile(r'(\d+)\s*(?:days?|calendar\s*days?)', re.IGNORECASE)),
]


def extract_keywords(text: str) -> List[str]:
    """Lowercase, strip punctuation and drop stop words and short tokens."""
    if not text:
        return []
    cleaned = re.sub(r'[^\w\s]', ' ', text.lower())
    return [word for word in cleaned.split() if len(word) > 2 and word not in STOP_WORDS]


class QueryAnalyzer:
    """Extracts legal references, numerical constraints and keywords from a question."""

    def analyze(self, text: str) -> QueryAnalysis:
        analysis = QueryAnalysis(
            keywords=extract_keywords(text),
            legal_references=self.extract_legal_references(text),
            numerical_query=self.extract_numerical_query(text),
        )
        logger.debug(
            f"Analyzed query: {len(analysis.keywords)} keywords, "
            f"{len(analysis.legal_references)} references, "
            f"numerical={analysis.numerical_query is not None}"
        )
        return analysis

    def extract_legal_references(self, text: str) -> List[LegalReference]:
        """Find act, rule, section, department order and labor advisory references."""
        references = []
        if not text:
            return references

        for ref_type, pattern in _REFERENCE_PATTERNS:
            for match in pattern.finditer(text):
                identifier = match.group(1)
                references.append(LegalReference(
                    type=ref_type,
                    identifier=identifier,
                    full_reference=f"{_REFERENCE_LABELS[ref_type]} {identifier}",
                ))

        return references

    def extract_numerical_query(self, text: str) -> Optional[NumericalQuery]:
        """Return the first amount, hour, worker or day count found in the text."""
        if not text:
            return None

        for currency in _CURRENCY_PATTERN.finditer(text):
            try:
                value = float(currency.group(1).replace(',', ''))
                return NumericalQuery(value=value, unit="PHP", operator="exact")
            except ValueError:
                logger.debug(f"Ignoring unparsable amount: {currency.group(0)!r}")

        for unit, pattern in _COUNT_PATTERNS:
            match = pattern.search(text)
            if match:
                return NumericalQuery(value=int(match.group(1)), unit=unit, operator="exact")

        return None

    def to_request(self, text: str,
                   section_numbers: Optional[Iterable[str]] = None,
                   law_ids: Optional[Iterable[str]] = None,
                   numerical_query: Optional[NumericalQuery] = None,
                   embedding: Optional[List[float]] = None,
                   min_score: Optional[float] = None,
                   limit: Optional[int] = None,
                   analysis: Optional[QueryAnalysis] = None) -> SearchRequest:
        """
        Build a search request from free text.

        Explicit arguments take precedence over the hints found in the text.
        Pass a precomputed analysis to avoid scanning the text twice.
        """
        analysis = analysis or self.analyze(text)
        return SearchRequest(
            query=text,
            embedding=embedding,
            section_numbers=list(section_numbers) if section_numbers else self._section_numbers(analysis),
            law_ids=list(law_ids) if law_ids else self._law_ids(analysis),
            numerical_query=numerical_query or analysis.numerical_query,
            min_score=min_score,
            limit=limit,
        )

    @staticmethod
    def _section_numbers(analysis: QueryAnalysis) -> List[str]:
        return [ref.identifier for ref in analysis.legal_references if ref.type == "section"]

    @staticmethod
    def _law_ids(analysis: QueryAnalysis) -> List[str]:
        # Law ids in the store look like "ra11058", "rule1030", "do252"
        return [f"{ref.type}{ref.identifier}" for ref in analysis.legal_references if ref.type != "section"]
