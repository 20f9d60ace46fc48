"""
Hybrid search: runs the applicable retrieval strategies concurrently, fuses
their candidates and returns a thresholded, ranked result list.
"""
import asyncio
import time
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from .config import OPENAI_API_KEY, SearchConfig
from .document_store import SectionStore
from .embedding_service import EmbeddingService
from .exceptions import VectorSearchUnavailable
from .models.retrieval_models import HybridSearchResult, MatchType, SearchRequest, SearchResult
from .query_analyzer import QueryAnalyzer
from .retrieval.base import RetrievalStrategy
from .retrieval.keyword_search import KeywordSearchEngine
from .retrieval.law_filter import LawFilterEngine
from .retrieval.numerical_search import NumericalSearchEngine
from .retrieval.result_fusion import ResultFusion
from .retrieval.section_search import SectionNumberSearchEngine
from .retrieval.vector_search import VectorSearchEngine

logger = logging.getLogger(__name__)


def filter_by_score(results: Iterable[SearchResult], min_score: float) -> List[SearchResult]:
    return [r for r in results if r.score >= min_score]


def rank_results(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Score descending; ties go to the lower section number, then the lower id."""
    return sorted(results, key=lambda r: (-r.score, r.section.section_number, r.section.id))


class HybridSearchService:
    """Entry point for hybrid legal-section retrieval."""

    def __init__(self, store: SectionStore,
                 embedding_service: Optional[EmbeddingService] = None,
                 config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()
        self.store = store
        self.embedding_service = embedding_service
        self.analyzer = QueryAnalyzer()
        self.result_fusion = ResultFusion(max_highlights=self.config.max_highlights)

        # Listed in dispatch order
        self.strategies: List[RetrievalStrategy] = [
            VectorSearchEngine(store, self.config),
            SectionNumberSearchEngine(store, self.config),
            LawFilterEngine(store, self.config),
            KeywordSearchEngine(store, self.config),
            NumericalSearchEngine(store, self.config),
        ]

    async def search(self, request: SearchRequest) -> HybridSearchResult:
        start_time = time.perf_counter()
        # One budget covers query embedding and every strategy
        deadline = asyncio.get_running_loop().time() + self.config.request_timeout_seconds

        request, embedding_timed_out = await self._resolve_embedding(request, deadline)

        applicable = [s for s in self.strategies if s.is_applicable(request)]
        strategies_used = [s.match_type for s in applicable]

        retrieval_results, failed, timed_out = await self._execute_strategies(applicable, request, deadline)

        if embedding_timed_out:
            # Vector search was wanted but the budget ran out before it could start
            strategies_used.insert(0, MatchType.VECTOR)
            timed_out.insert(0, MatchType.VECTOR)

        fused = self.result_fusion.fuse_results(
            retrieval_results[m] for m in strategies_used if m in retrieval_results
        )

        min_score = request.min_score if request.min_score is not None else self.config.min_combined_score
        limit = request.limit or self.config.default_limit
        ranked = rank_results(filter_by_score((f.to_result() for f in fused.values()), min_score))

        result = HybridSearchResult(
            results=ranked[:limit],
            total_found=len(fused),
            elapsed_ms=(time.perf_counter() - start_time) * 1000,
            strategies_used=strategies_used,
            strategies_failed=failed,
            strategies_timed_out=timed_out,
        )

        if strategies_used and not result.strategies_succeeded:
            logger.warning(f"All dispatched strategies failed: {[s.value for s in strategies_used]}")
        logger.info(
            f"Hybrid search completed in {result.elapsed_ms:.1f}ms. "
            f"Fused {result.total_found} sections, returning {len(result.results)}"
        )
        return result

    async def search_text(self, text: str, **kwargs) -> HybridSearchResult:
        """Analyze free text into a request and search with it."""
        return await self.search(self.analyzer.to_request(text, **kwargs))

    async def _resolve_embedding(self, request: SearchRequest, deadline: float) -> Tuple[SearchRequest, bool]:
        """
        Embed the query text when no embedding was supplied.

        Returns the request and whether the embedding missed the deadline.
        """
        if request.embedding or not request.query:
            return request, False

        if self.embedding_service is None:
            logger.debug("No embedding service configured, vector search skipped")
            return request, False

        remaining = deadline - asyncio.get_running_loop().time()
        try:
            embedding = await asyncio.wait_for(self.embedding_service.embed(request.query), timeout=remaining)
        except asyncio.TimeoutError:
            logger.warning(f"Query embedding timed out after {self.config.request_timeout_seconds}s, vector search skipped")
            return request, True
        except Exception as e:
            logger.warning(f"Query embedding failed, vector search skipped: {str(e)}")
            return request, False

        return request.model_copy(update={"embedding": embedding}), False

    async def _execute_strategies(
        self, strategies: List[RetrievalStrategy], request: SearchRequest, deadline: float
    ) -> Tuple[Dict[MatchType, List[SearchResult]], List[MatchType], List[MatchType]]:
        """Run strategies in parallel until they finish or the deadline passes."""
        retrieval_results: Dict[MatchType, List[SearchResult]] = {}
        failed: List[MatchType] = []
        timed_out: List[MatchType] = []

        if not strategies:
            return retrieval_results, failed, timed_out

        remaining = deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            logger.warning(f"Search budget spent before dispatch, skipping {[s.match_type.value for s in strategies]}")
            timed_out.extend(s.match_type for s in strategies)
            return retrieval_results, failed, timed_out

        tasks = {
            asyncio.create_task(self._run_strategy(strategy, request)): strategy
            for strategy in strategies
        }
        done, pending = await asyncio.wait(tasks.keys(), timeout=remaining)

        # Abandon whatever missed the deadline
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)

        for task, strategy in tasks.items():
            if task in pending:
                logger.warning(f"{strategy.match_type.value} search timed out after {self.config.request_timeout_seconds}s")
                timed_out.append(strategy.match_type)
                continue
            documents = task.result()
            if documents is None:
                failed.append(strategy.match_type)
            else:
                retrieval_results[strategy.match_type] = documents

        return retrieval_results, failed, timed_out

    async def _run_strategy(self, strategy: RetrievalStrategy,
                            request: SearchRequest) -> Optional[List[SearchResult]]:
        """Run one strategy; None means it failed."""
        try:
            documents = await strategy.search(request)
            logger.info(f"{strategy.match_type.value} search completed with {len(documents)} results")
            return documents
        except VectorSearchUnavailable as e:
            logger.warning(f"Vector search not available - pgvector may not be enabled: {str(e)}")
            return None
        except Exception as e:
            logger.error(f"{strategy.match_type.value} search failed: {str(e)}")
            return None


# Singleton instance
_search_service_instance = None

def get_search_service() -> HybridSearchService:
    """
    Entry point to get the shared search service backed by the database.
    """
    global _search_service_instance
    if _search_service_instance is None:
        from legal_search.db.session import SessionLocal
        from .sql_store import SqlSectionStore

        embedding_service = None
        if OPENAI_API_KEY:
            embedding_service = EmbeddingService()
        else:
            logger.warning("OPENAI_API_KEY not set, vector search only runs for pre-embedded requests")

        _search_service_instance = HybridSearchService(
            store=SqlSectionStore(SessionLocal),
            embedding_service=embedding_service,
            config=SearchConfig.from_env(),
        )
    return _search_service_instance
