"""
Precision evaluation for ranked result lists.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Sequence

logger = logging.getLogger(__name__)

PRECISION_CUTOFF = 5


def result_doc_id(result: Any) -> Optional[str]:
    """Extract the document id of a result (Candidate, mapping with 'doc_id', or plain id)."""
    if result is None:
        return None
    if isinstance(result, str):
        return result
    if isinstance(result, Mapping):
        doc_id = result.get("doc_id")
    else:
        doc_id = getattr(result, "doc_id", None)
    return str(doc_id) if doc_id is not None else None


def calculate_precision(
    results: Sequence[Any],
    relevant_doc_ids: Iterable[str],
    k: int = PRECISION_CUTOFF
) -> float:
    """Calculate Precision@K.

    Only the first min(k, len(results)) results are considered; the
    denominator is the number considered, and an empty list scores 0.
    """
    if k <= 0:
        raise ValueError("k must be a positive integer")

    relevant = set(relevant_doc_ids)
    top_results = list(results[:k])
    if len(top_results) == 0:
        return 0.0

    hits = sum(1 for result in top_results if result_doc_id(result) in relevant)
    return hits / len(top_results)
