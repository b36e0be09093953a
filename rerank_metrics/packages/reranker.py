"""
Second-pass reordering of baseline candidates by a reranking provider.

Providers:
- bge - cross-encoder scores (sentence-transformers)
- llm - OpenAI chat completion returning a ranked id list
- none - passthrough, keeps the baseline order
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from rerank_metrics.packages.cross_encoder_scorer import CrossEncoderScorer
from rerank_metrics.packages.llm_ranker import LLMRanker
from rerank_metrics.packages.models import Candidate, MAX_CANDIDATES, RerankerProvider

logger = logging.getLogger(__name__)

FALLBACK_PROVIDER = RerankerProvider.BGE
DEFAULT_TOP_K = 15


@dataclass(frozen=True)
class RerankOptions:
    """Per-call rerank settings; None means use the reranker defaults."""
    provider: Optional[RerankerProvider] = None
    top_k: Optional[int] = None
    max_candidates: Optional[int] = None


def normalize_provider(provider: Union[str, RerankerProvider, None]) -> RerankerProvider:
    """Map a provider name to RerankerProvider; unknown names become NONE."""
    if isinstance(provider, RerankerProvider):
        return provider
    try:
        return RerankerProvider((provider or "").strip().lower())
    except ValueError:
        return RerankerProvider.NONE


def clamp_positive_int(value: Optional[int], maximum: int, fallback: int) -> int:
    """Clamp value to [1, maximum], using fallback when value is missing or not positive."""
    try:
        parsed = int(value) if value is not None else None
    except (TypeError, ValueError):
        parsed = None
    if parsed is None or parsed <= 0:
        return min(fallback, maximum)
    return min(parsed, maximum)


class Reranker:
    """Dispatch rerank calls to the selected provider backend."""

    def __init__(
        self,
        provider: Union[str, RerankerProvider] = RerankerProvider.BGE,
        cross_encoder: Optional[CrossEncoderScorer] = None,
        llm_ranker: Optional[LLMRanker] = None,
        default_top_k: int = DEFAULT_TOP_K
    ):
        """Initialize reranker.

        Backends are optional; a missing cross encoder is created on first use,
        a missing LLM ranker makes the llm provider fall back to bge.
        """
        self.provider = normalize_provider(provider)
        self.cross_encoder = cross_encoder
        self.llm_ranker = llm_ranker
        self.default_top_k = default_top_k

    def select_provider(self, override: Union[str, RerankerProvider, None] = None) -> RerankerProvider:
        """Resolve the provider for a call: override, else the configured one."""
        provider = normalize_provider(override) if override is not None else self.provider
        if provider == RerankerProvider.LLM and self.llm_ranker is None:
            logger.warning(f"LLM ranker is not configured, falling back to {FALLBACK_PROVIDER.value}")
            return FALLBACK_PROVIDER
        return provider

    def rerank(
        self,
        query: str,
        candidates: Sequence[Candidate],
        options: Optional[RerankOptions] = None
    ) -> List[Candidate]:
        """Reorder candidates by provider relevance; returns new Candidate objects."""
        if not candidates:
            return []

        options = options or RerankOptions()
        provider = self.select_provider(options.provider)
        top_k = clamp_positive_int(options.top_k, len(candidates), self.default_top_k)
        max_candidates = min(
            clamp_positive_int(options.max_candidates, len(candidates), MAX_CANDIDATES),
            MAX_CANDIDATES
        )
        logger.info(
            f"Reranking {len(candidates)} candidates with provider={provider.value}, "
            f"top_k={top_k}, max_candidates={max_candidates}")

        if provider == RerankerProvider.NONE:
            return [
                _with_rerank_data(c, c.similarity, RerankerProvider.NONE)
                for c in candidates[:top_k]
            ]

        considered = list(candidates[:max_candidates])
        try:
            if provider == RerankerProvider.LLM:
                scores = self._score_with_llm(query, considered)
            else:
                scores = self._score_with_cross_encoder(query, considered)
        except Exception as e:
            logger.error(f"Reranking with provider {provider.value} failed: {e}")
            raise

        reranked = [
            _with_rerank_data(candidate, score, provider)
            for candidate, score in zip(considered, scores)
        ]
        reranked.sort(key=lambda c: c.rerank_score, reverse=True)
        return reranked[:top_k]

    def _score_with_cross_encoder(self, query: str, candidates: List[Candidate]) -> List[float]:
        if self.cross_encoder is None:
            self.cross_encoder = CrossEncoderScorer()
        return self.cross_encoder.score(query, [c.text for c in candidates])

    def _score_with_llm(self, query: str, candidates: List[Candidate]) -> List[float]:
        # Fragments of one document share doc_id, so the model sees positional ids
        llm_input = [
            {"id": str(index), "title": c.doc_title, "text": c.text}
            for index, c in enumerate(candidates)
        ]
        ranked_ids = self.llm_ranker.rank_ids(query, llm_input)

        scores = [0.0] * len(candidates)
        total = len(ranked_ids)
        for rank, candidate_id in enumerate(ranked_ids):
            scores[int(candidate_id)] = float(total - rank) / total
        return scores


def _with_rerank_data(candidate: Candidate, score: float, provider: RerankerProvider) -> Candidate:
    return candidate.model_copy(update={
        "rerank_score": float(score),
        "rerank_provider": provider,
        "original_similarity": candidate.similarity
    })
