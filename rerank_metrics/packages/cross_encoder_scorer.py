"""
Cross-encoder relevance scoring (BGE reranker by default).

The sentence-transformers model is loaded on first use, so importing this
module stays cheap.
"""

import logging
import math
from typing import Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "BAAI/bge-reranker-base"
MAX_BATCH_SIZE = 50


def _load_cross_encoder(model_name: str):
    from sentence_transformers import CrossEncoder

    logger.info(f"Loading cross-encoder model: {model_name}")
    return CrossEncoder(model_name)


class CrossEncoderScorer:
    """Score (query, text) pairs with a cross-encoder model."""

    def __init__(
        self,
        model_name: str = DEFAULT_MODEL_NAME,
        batch_size: int = 8,
        model_loader: Optional[Callable[[str], object]] = None
    ):
        if not isinstance(model_name, str) or not model_name.strip():
            raise ValueError("model_name must be a non-empty string")
        self.model_name = model_name
        self.batch_size = min(max(1, int(batch_size)), MAX_BATCH_SIZE)
        self._model_loader = model_loader or _load_cross_encoder
        self._model = None

    def _get_model(self):
        if self._model is None:
            self._model = self._model_loader(self.model_name)
        return self._model

    def score(self, query: str, texts: Sequence[str]) -> List[float]:
        """Score a single query against a list of texts, in input order."""
        if not texts:
            return []

        model = self._get_model()
        scores: List[float] = []
        for start in range(0, len(texts), self.batch_size):
            batch = texts[start:start + self.batch_size]
            pairs = [(query, text or "") for text in batch]
            raw = model.predict(pairs, batch_size=self.batch_size, show_progress_bar=False)
            scores.extend(_to_finite_float(value) for value in raw)

        logger.debug(f"Scored {len(scores)} texts with {self.model_name}")
        return scores


def _to_finite_float(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0
