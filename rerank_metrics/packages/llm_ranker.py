"""Rank candidates using OpenAI LLM."""

import json
import logging
from pathlib import Path
from typing import List

from openai import OpenAI

logger = logging.getLogger(__name__)

RANKING_PROMPT_PATH = Path(__file__).parent.parent / "prompts" / "rank_candidates.md"
RANKING_PROMPT_TEMPLATE = RANKING_PROMPT_PATH.read_text(encoding="utf-8")

# Excerpt length sent to the model per candidate
MAX_TEXT_CHARS = 500


class LLMRanker:
    """Rank candidates using OpenAI LLM."""

    def __init__(self, openai_client: OpenAI, model: str, temperature: float):
        """Initialize LLM ranker."""
        self.client = openai_client
        self.model = model
        self.temperature = temperature

    def rank_ids(self, query: str, candidates: List[dict]) -> List[str]:
        """Return candidate ids ordered by LLM relevance judgment.

        Each candidate is a dict with 'id', 'title' and 'text'. Raises
        ValueError when the model does not return exactly the input ids.
        """
        logger.info(f"Ranking {len(candidates)} candidates for query: '{query}'")

        prompt = self._build_ranking_prompt(query, candidates)
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": "You are a search relevance expert."},
                {"role": "user", "content": prompt}
            ],
            temperature=self.temperature,
            response_format={"type": "json_object"}
        )

        llm_output = json.loads(response.choices[0].message.content)
        ranked_ids = [str(doc_id) for doc_id in llm_output.get("ranked_ids", [])]

        input_ids = [str(c['id']) for c in candidates]
        if len(ranked_ids) != len(input_ids) or set(ranked_ids) != set(input_ids):
            missing_in_output = set(input_ids) - set(ranked_ids)
            extra_in_output = set(ranked_ids) - set(input_ids)
            error_msg = (
                f"LLM returned {len(ranked_ids)} ranked IDs for {len(input_ids)} candidates. "
                f"Missing in output: {missing_in_output}, "
                f"Extra in output: {extra_in_output}"
            )
            logger.error(error_msg)
            raise ValueError(error_msg)

        logger.info(f"LLM ranked {len(ranked_ids)} candidates")
        return ranked_ids

    def _build_ranking_prompt(self, query: str, candidates: List[dict]) -> str:
        """Build prompt for LLM ranking."""
        candidates_json = "\n".join([
            json.dumps({
                "id": str(doc['id']),
                "title": doc.get('title', ''),
                "text": (doc.get('text') or '')[:MAX_TEXT_CHARS]
            })
            for doc in candidates
        ])

        return RANKING_PROMPT_TEMPLATE.format(
            query=query,
            candidates_json=candidates_json
        )
