"""
Rerank metrics script.

For each query: fetch the lexical baseline, rerank it, and compare precision@5
and latency. Prints a table and the average deltas once every query succeeded.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv
from openai import OpenAI
from pymongo.errors import PyMongoError

from rerank_metrics.config import MetricsRunConfig, MetricsSettings, build_run_config, get_config
from rerank_metrics.packages.candidate_fetcher import CandidateFetcher
from rerank_metrics.packages.cross_encoder_scorer import CrossEncoderScorer
from rerank_metrics.packages.evaluation_framework import (
    MetricRow,
    MetricsReport,
    calculate_precision,
    format_report,
)
from rerank_metrics.packages.llm_ranker import LLMRanker
from rerank_metrics.packages.models import MAX_CANDIDATES, QuerySpec, RerankerProvider
from rerank_metrics.packages.mongodb_client import MongoDBClient
from rerank_metrics.packages.reranker import Reranker, RerankOptions

logger = logging.getLogger(__name__)


def measure_query(
    fetcher: CandidateFetcher,
    reranker: Reranker,
    query_spec: QuerySpec,
    provider: RerankerProvider
) -> MetricRow:
    """Measure baseline and reranked precision@5 and latency for one query."""
    baseline_start = time.perf_counter()
    baseline_candidates = fetcher.fetch_candidates(query_spec.query)
    baseline_end = time.perf_counter()

    baseline_precision = calculate_precision(baseline_candidates, query_spec.relevant_doc_ids)
    logger.info(
        f"  Retrieved {len(baseline_candidates)} candidates "
        f"(baseline precision: {baseline_precision:.2f})")

    rerank_start = time.perf_counter()
    reranked = reranker.rerank(
        query_spec.query,
        baseline_candidates,
        RerankOptions(
            provider=provider,
            top_k=len(baseline_candidates),
            max_candidates=MAX_CANDIDATES
        )
    )
    rerank_end = time.perf_counter()

    reranked_precision = calculate_precision(reranked, query_spec.relevant_doc_ids)

    return MetricRow.build(
        query=query_spec.query,
        baseline_precision=baseline_precision,
        reranked_precision=reranked_precision,
        baseline_ms=(baseline_end - baseline_start) * 1000.0,
        reranked_ms=(rerank_end - rerank_start) * 1000.0
    )


def run_metrics(
    fetcher: CandidateFetcher,
    reranker: Reranker,
    run_config: MetricsRunConfig
) -> MetricsReport:
    """Measure every query in order; the first failure aborts the run."""
    rows: List[MetricRow] = []
    for query_spec in run_config.queries:
        logger.info(f'Measuring "{query_spec.query}"...')
        rows.append(measure_query(fetcher, reranker, query_spec, run_config.provider))

    report = MetricsReport.from_rows(rows)
    logger.info(f"Measured {len(rows)} queries")
    return report


def build_reranker(settings: MetricsSettings) -> Reranker:
    """Create the reranker and the backends the configured provider can use."""
    llm_ranker = None
    if settings.OPENAI_API_KEY:
        llm_ranker = LLMRanker(
            openai_client=OpenAI(api_key=settings.OPENAI_API_KEY),
            model=settings.llm_ranker_model,
            temperature=settings.llm_ranker_temperature
        )

    return Reranker(
        provider=settings.reranker_provider,
        cross_encoder=CrossEncoderScorer(
            model_name=settings.bge_model_name,
            batch_size=settings.rerank_batch_size
        ),
        llm_ranker=llm_ranker,
        default_top_k=settings.rerank_default_top_k
    )


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Main coordinator function. Returns the process exit code."""
    # Load .env.local from the working directory for local development
    env_local_path = Path('.env.local')
    if env_local_path.exists():
        load_dotenv(env_local_path)

    try:
        settings = get_config(argv)
    except ValueError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        run_config = build_run_config(settings)
    except ValueError as e:
        logger.error(f"Invalid query set: {e}")
        return 1

    try:
        mongo_client = MongoDBClient(
            username=settings.MONGODB_USERNAME,
            password=settings.MONGODB_PASSWORD,
            uri=settings.MONGODB_URI,
        ).get_client()
    except (ValueError, PyMongoError) as e:
        logger.error(f"Could not create MongoDB client: {e}")
        return 1

    try:
        fetcher = CandidateFetcher(
            mongo_client=mongo_client,
            database_name=settings.MONGODB_DATABASE_NAME,
            collection_id=run_config.collection_id,
            chunks_collection=settings.MONGODB_CHUNKS_COLLECTION,
            documents_collection=settings.MONGODB_DOCUMENTS_COLLECTION
        )
        report = run_metrics(fetcher, build_reranker(settings), run_config)
    except Exception as e:
        logger.exception(f"Rerank metrics run failed: {e}")
        return 1
    finally:
        mongo_client.close()
        logger.info("Closed MongoDB client")

    print()
    print(format_report(report))
    return 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
