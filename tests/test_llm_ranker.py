"""Tests for the OpenAI-backed ranker."""

import json
from unittest.mock import MagicMock

import pytest

from rerank_metrics.packages.llm_ranker import LLMRanker


def _client_returning(payload: dict):
    client = MagicMock()
    message = MagicMock()
    message.content = json.dumps(payload)
    client.chat.completions.create.return_value.choices = [MagicMock(message=message)]
    return client


CANDIDATES = [
    {"id": "0", "title": "Routing", "text": "navigator"},
    {"id": "1", "title": "Widgets", "text": "lifecycle"},
]


class TestLLMRanker:
    def test_returns_ranked_ids(self):
        client = _client_returning({"ranked_ids": ["1", "0"]})
        ranker = LLMRanker(client, model="gpt-4o", temperature=0.0)

        assert ranker.rank_ids("widget lifecycle", CANDIDATES) == ["1", "0"]

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["response_format"] == {"type": "json_object"}
        prompt = kwargs["messages"][1]["content"]
        assert "widget lifecycle" in prompt
        assert '"title": "Widgets"' in prompt

    def test_numeric_ids_are_normalized_to_strings(self):
        client = _client_returning({"ranked_ids": [0, 1]})
        assert LLMRanker(client, "m", 0.0).rank_ids("q", CANDIDATES) == ["0", "1"]

    def test_missing_ids_raise(self):
        client = _client_returning({"ranked_ids": ["1"]})
        with pytest.raises(ValueError, match="Missing in output"):
            LLMRanker(client, "m", 0.0).rank_ids("q", CANDIDATES)

    def test_unknown_ids_raise(self):
        client = _client_returning({"ranked_ids": ["1", "7"]})
        with pytest.raises(ValueError):
            LLMRanker(client, "m", 0.0).rank_ids("q", CANDIDATES)

    def test_duplicate_ids_raise(self):
        client = _client_returning({"ranked_ids": ["1", "1", "0"]})
        with pytest.raises(ValueError):
            LLMRanker(client, "m", 0.0).rank_ids("q", CANDIDATES)
