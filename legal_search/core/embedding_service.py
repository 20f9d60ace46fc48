"""
Query embeddings via the OpenAI embeddings API.
"""
import re
from typing import List, Dict, Optional
import logging

from openai import AsyncOpenAI

from .config import OPENAI_API_KEY, EMBEDDING_MODEL, EMBEDDING_DIMENSIONS
from .exceptions import EmbeddingError

logger = logging.getLogger(__name__)

# Rough character budget for the model's 8191-token input limit
MAX_INPUT_CHARS = 8191 * 4


class EmbeddingService:
    """Generates and caches text embeddings for semantic search."""

    def __init__(self, client: Optional[AsyncOpenAI] = None,
                 model: str = EMBEDDING_MODEL,
                 dimensions: int = EMBEDDING_DIMENSIONS):
        self.client = client or AsyncOpenAI(api_key=OPENAI_API_KEY)
        self.model = model
        self.dimensions = dimensions
        self._cache: Dict[str, List[float]] = {}

    async def embed(self, text: str) -> List[float]:
        """
        Generate an embedding for a single text.

        Raises:
            EmbeddingError: if the text is empty or the API call fails
        """
        cleaned = self._prepare_text(text)
        if not cleaned:
            raise EmbeddingError("Cannot generate embedding for empty text")

        if cleaned in self._cache:
            return self._cache[cleaned]

        try:
            response = await self.client.embeddings.create(
                model=self.model,
                input=cleaned,
                dimensions=self.dimensions
            )
        except Exception as e:
            logger.error(f"Failed to generate embedding: {str(e)}")
            raise EmbeddingError(str(e)) from e

        embedding = response.data[0].embedding
        self._cache[cleaned] = embedding
        return embedding

    def clear_cache(self) -> None:
        self._cache.clear()

    @staticmethod
    def _prepare_text(text: Optional[str]) -> str:
        if not text:
            return ""
        return re.sub(r'\s+', ' ', text).strip()[:MAX_INPUT_CHARS]
