"""
Configuration management for rerank metrics runs: environment variables,
command-line overrides and the query set.
"""

import argparse
import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from pydantic import Field, TypeAdapter, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rerank_metrics.packages.models import QuerySpec, RerankerProvider

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_ID = "00000000-0000-0000-0000-000000000002"

DEFAULT_QUERIES: Tuple[QuerySpec, ...] = (
    QuerySpec(
        query="flutter async widget lifecycle diagram",
        relevant_doc_ids=["11111111-1111-1111-1111-111111111111"],
    ),
    QuerySpec(
        query="stateful counter setState hot reload tips",
        relevant_doc_ids=["22222222-2222-2222-2222-222222222222"],
    ),
    QuerySpec(
        query="flutter router navigator 2 declarative navigation",
        relevant_doc_ids=["33333333-3333-3333-3333-333333333333"],
    ),
    QuerySpec(
        query="dart testing checklist arrange act assert golden tests",
        relevant_doc_ids=["44444444-4444-4444-4444-444444444444"],
    ),
    QuerySpec(
        query="bloc pattern event reducers performance tuning",
        relevant_doc_ids=["55555555-5555-5555-5555-555555555555"],
    ),
)

_QUERY_LIST_ADAPTER = TypeAdapter(List[QuerySpec])


class MetricsSettings(BaseSettings):
    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    collection_id: str = Field(DEFAULT_COLLECTION_ID, alias="METRICS_COLLECTION_ID",
                               description="Collection scope for candidate fragments")
    queries_json: Optional[str] = Field(None, alias="METRICS_QUERIES_JSON",
                                        description="JSON list overriding the default query set")
    reranker_provider: RerankerProvider = Field(
        RerankerProvider.BGE,
        alias="RERANKER_PROVIDER",
        description=f"Reranker provider, allowed: {[p.value for p in RerankerProvider]}"
    )
    rerank_default_top_k: int = Field(15, alias="RERANK_DEFAULT_TOP_K", ge=1, le=50)
    rerank_batch_size: int = Field(8, alias="RERANK_BATCH_SIZE", ge=1, le=50)
    bge_model_name: str = Field("BAAI/bge-reranker-base", alias="BGE_MODEL_NAME")
    llm_ranker_model: str = Field("gpt-4o", alias="LLM_RANKER_MODEL")
    llm_ranker_temperature: float = Field(0.0, alias="LLM_RANKER_TEMPERATURE")
    log_level: str = Field('INFO', alias="LOG_LEVEL", description="Logging level",
                           examples=["CRITICAL", "FATAL", "ERROR", "WARNING", "INFO", "DEBUG"])
    MONGODB_DATABASE_NAME: str = Field(default="knowledge-base", description="MongoDB database name")
    MONGODB_CHUNKS_COLLECTION: str = Field(default="chunks", description="Fragments collection")
    MONGODB_DOCUMENTS_COLLECTION: str = Field(default="documents", description="Parent documents collection")
    MONGODB_USERNAME: str = Field(default="", description="Mongodb user")
    MONGODB_PASSWORD: str = Field(default="", description="Mongodb password")
    MONGODB_URI: str = Field(description="Mongodb uri. Example: mongodb+srv://cluster.mongodb.net/?appName=rerank-metrics")
    OPENAI_API_KEY: Optional[str] = Field(default=None, description="OpenAI API key for the llm provider")

    @field_validator("reranker_provider", mode="before")
    def lower_provider(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("log_level")
    def check_log_level(cls, v):
        name = v.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return name


@dataclass(frozen=True)
class MetricsRunConfig:
    """Everything the metrics driver needs, built once at startup."""
    collection_id: str
    provider: RerankerProvider
    queries: Tuple[QuerySpec, ...]


def parse_queries_json(raw: str) -> List[QuerySpec]:
    """Parse a JSON query set: [{"query": ..., "relevantDocIds": [...]}, ...]."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"METRICS_QUERIES_JSON is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"METRICS_QUERIES_JSON must be a JSON list, got {type(data).__name__}")

    return _QUERY_LIST_ADAPTER.validate_python(data)


def load_query_specs(settings: MetricsSettings) -> List[QuerySpec]:
    """Query set from the override when present, else the built-in defaults."""
    if settings.queries_json is None:
        logger.info(f"Using {len(DEFAULT_QUERIES)} default queries")
        return list(DEFAULT_QUERIES)

    queries = parse_queries_json(settings.queries_json)
    logger.info(f"Loaded {len(queries)} queries from METRICS_QUERIES_JSON")
    return queries


def build_run_config(settings: MetricsSettings) -> MetricsRunConfig:
    return MetricsRunConfig(
        collection_id=settings.collection_id,
        provider=settings.reranker_provider,
        queries=tuple(load_query_specs(settings))
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Measure precision@5 and latency of reranking against a lexical baseline")

    parser.add_argument(
        "--collection-id",
        dest="collection_id",
        help=f"Collection scope (env: METRICS_COLLECTION_ID, default: {DEFAULT_COLLECTION_ID})",
    )

    parser.add_argument(
        "--queries-json",
        dest="queries_json",
        help="JSON list of {query, relevantDocIds} (env: METRICS_QUERIES_JSON)",
    )

    parser.add_argument(
        "--provider",
        dest="reranker_provider",
        choices=[p.value for p in RerankerProvider],
        help="Reranker provider (env: RERANKER_PROVIDER, default: bge)",
    )

    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Logging level (env: LOG_LEVEL)",
    )

    return parser.parse_args(argv)


def get_config(argv: Optional[Sequence[str]] = None) -> MetricsSettings:
    args = parse_args(argv)
    # Only include CLI values that are actually set
    cli_overrides = {k: v for k, v in vars(args).items() if v is not None}
    return MetricsSettings(**cli_overrides)
