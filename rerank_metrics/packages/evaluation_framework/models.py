"""
Data models for the evaluation framework.
"""

from dataclasses import dataclass
from typing import List, NewType, Tuple

# Type aliases to enforce type safety
DocumentId = NewType('DocumentId', str)
QueryText = NewType('QueryText', str)


@dataclass(frozen=True)
class MetricRow:
    """Baseline vs reranked measurements for one query."""
    query: QueryText
    baseline_precision: float
    reranked_precision: float
    precision_delta: float
    baseline_ms: float
    reranked_ms: float
    latency_delta: float

    @classmethod
    def build(
        cls,
        query: str,
        baseline_precision: float,
        reranked_precision: float,
        baseline_ms: float,
        reranked_ms: float
    ) -> "MetricRow":
        """Create a row; deltas are reranked minus baseline."""
        return cls(
            query=QueryText(query),
            baseline_precision=baseline_precision,
            reranked_precision=reranked_precision,
            precision_delta=reranked_precision - baseline_precision,
            baseline_ms=baseline_ms,
            reranked_ms=reranked_ms,
            latency_delta=reranked_ms - baseline_ms
        )


@dataclass(frozen=True)
class MetricsReport:
    """All rows of a run plus the mean deltas."""
    rows: Tuple[MetricRow, ...]
    average_precision_delta: float
    average_latency_delta: float

    @classmethod
    def from_rows(cls, rows: List[MetricRow]) -> "MetricsReport":
        return cls(
            rows=tuple(rows),
            average_precision_delta=_mean([row.precision_delta for row in rows]),
            average_latency_delta=_mean([row.latency_delta for row in rows])
        )


def _mean(values: List[float]) -> float:
    if len(values) == 0:
        return 0.0
    return sum(values) / len(values)
