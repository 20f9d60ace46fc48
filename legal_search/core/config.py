# legal_search/core/config.py
import os
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# This line finds the .env file in the project root and loads its variables.
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg2://localhost:5432/legal_search")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
EMBEDDING_DIMENSIONS = int(os.getenv("EMBEDDING_DIMENSIONS", "1536"))
SEARCH_TIMEOUT_SECONDS = float(os.getenv("SEARCH_TIMEOUT_SECONDS", "10"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class SearchConfig(BaseModel):
    """Scoring weights, floors and limits for hybrid search."""
    model_config = ConfigDict(frozen=True)

    # Per-strategy weights
    vector_weight: float = 0.5
    section_number_weight: float = 0.3
    law_id_score: float = 0.1
    keyword_weight: float = 0.15
    numerical_weight: float = 0.05
    non_exact_numerical_factor: float = 0.7

    # Floors
    min_vector_similarity: float = 0.3
    min_combined_score: float = 0.25

    default_limit: int = Field(default=5, ge=1)
    max_highlights: int = 3
    max_keyword_highlights: int = 2

    # Store query caps used when the caller gives no limit
    section_candidate_cap: int = 10
    law_candidate_cap: int = 20
    keyword_candidate_cap: int = 15
    numerical_candidate_cap: int = 10

    request_timeout_seconds: float = Field(default=10.0, gt=0)

    @classmethod
    def from_env(cls) -> "SearchConfig":
        return cls(request_timeout_seconds=SEARCH_TIMEOUT_SECONDS)
