import logging
from fastapi import APIRouter, Depends
from legal_search.schemas.search import SearchQuery, SearchResponse, AnalyzeRequest
from legal_search.core.hybrid_search import HybridSearchService, get_search_service
from legal_search.core.models.query_models import QueryAnalysis
from legal_search.core.models.retrieval_models import SearchRequest
from legal_search.core.query_analyzer import QueryAnalyzer

router = APIRouter()

logger = logging.getLogger(__name__)

analyzer = QueryAnalyzer()

@router.post("/", response_model=SearchResponse)
async def search_sections(body: SearchQuery, service: HybridSearchService = Depends(get_search_service)):
    """
    Runs a hybrid search. When `analyze` is set, legal references and
    amounts found in the query text are added to the explicit filters.
    """
    logger.info(f"Received search request: {body.query!r}")

    analysis = None
    if body.analyze and body.query:
        analysis = analyzer.analyze(body.query)
        request = analyzer.to_request(
            body.query,
            section_numbers=body.section_numbers,
            law_ids=body.law_ids,
            numerical_query=body.numerical_query,
            embedding=body.embedding,
            min_score=body.min_score,
            limit=body.limit,
            analysis=analysis,
        )
    else:
        request = SearchRequest(**body.model_dump(exclude={"analyze"}))

    result = await service.search(request)

    return SearchResponse(
        results=result.results,
        total_found=result.total_found,
        elapsed_ms=result.elapsed_ms,
        strategies_used=result.strategies_used,
        strategies_failed=result.strategies_failed,
        strategies_timed_out=result.strategies_timed_out,
        strategies_succeeded=result.strategies_succeeded,
        analysis=analysis,
    )

@router.post("/analyze", response_model=QueryAnalysis)
def analyze_query(body: AnalyzeRequest):
    """
    Returns the keywords, legal references and numerical constraint found in a question.
    """
    return analyzer.analyze(body.query)
