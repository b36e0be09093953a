"""
Evaluation Framework for reranking measurements

Precision@K scoring, per-query metric rows and report rendering.
"""

from .evaluator import PRECISION_CUTOFF, calculate_precision, result_doc_id
from .models import DocumentId, QueryText, MetricRow, MetricsReport
from .report import format_report, format_summary, format_table

__all__ = [
    "DocumentId",
    "QueryText",
    "MetricRow",
    "MetricsReport",
    "PRECISION_CUTOFF",
    "calculate_precision",
    "result_doc_id",
    "format_report",
    "format_summary",
    "format_table",
]
