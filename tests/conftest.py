"""Shared fixtures for rerank metrics tests."""

from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest

from rerank_metrics.packages.models import Candidate


@pytest.fixture
def fragment_rows() -> List[Dict[str, Any]]:
    """Rows as returned by the fragments aggregation."""
    return [
        {"doc_id": "doc-a", "doc_title": "Widgets", "text": "Flutter widget lifecycle explained"},
        {"doc_id": "doc-b", "doc_title": "Routing", "text": "Navigator 2 declarative routing"},
        {"doc_id": "doc-c", "doc_title": "Widgets deep dive",
         "text": "Widget widget WIDGET lifecycle hooks"},
        {"doc_id": "doc-d", "doc_title": "Testing", "text": "Golden tests for widget trees"},
    ]


@pytest.fixture
def mongo_client(fragment_rows):
    """MagicMock MongoClient whose chunks collection aggregates to fragment_rows."""
    client = MagicMock()
    chunks = client["knowledge-base"]["chunks"]
    chunks.aggregate.return_value = fragment_rows
    return client


@pytest.fixture
def candidates() -> List[Candidate]:
    return [
        Candidate(doc_id="A", doc_title="A", text="alpha text", similarity=5),
        Candidate(doc_id="B", doc_title="B", text="beta text", similarity=4),
        Candidate(doc_id="C", doc_title="C", text="gamma text", similarity=3),
        Candidate(doc_id="D", doc_title="D", text="delta text", similarity=2),
        Candidate(doc_id="E", doc_title="E", text="epsilon text", similarity=1),
        Candidate(doc_id="F", doc_title="F", text="zeta text", similarity=1),
    ]
