"""Fetch collection fragments from MongoDB and rank them lexically (the baseline)."""

import logging
from typing import List

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from rerank_metrics.packages.lexical_scorer import lexical_score
from rerank_metrics.packages.models import Candidate, MAX_CANDIDATES

logger = logging.getLogger(__name__)


class CandidateFetcher:
    """Retrieve all fragments of one collection and keep the best lexical matches."""

    def __init__(
        self,
        mongo_client: MongoClient,
        database_name: str,
        collection_id: str,
        chunks_collection: str = "chunks",
        documents_collection: str = "documents",
        max_candidates: int = MAX_CANDIDATES
    ):
        """Initialize candidate fetcher."""
        self.mongo_client = mongo_client
        self.database_name = database_name
        self.collection_id = collection_id
        self.documents_collection = documents_collection
        self.max_candidates = max_candidates
        self.db = mongo_client[database_name]
        self.chunks = self.db[chunks_collection]

    def fetch_candidates(self, query: str) -> List[Candidate]:
        """Score every fragment against the query and return the top candidates."""
        logger.info(f"Fetching candidates for query: '{query}' (collection_id={self.collection_id})")

        rows = self._fetch_rows()
        logger.info(f"Loaded {len(rows)} fragments from collection {self.collection_id}")

        scored: List[Candidate] = []
        for row in rows:
            similarity = lexical_score(row.get("text", ""), query)
            if similarity <= 0:
                continue
            scored.append(Candidate(
                doc_id=str(row["doc_id"]),
                doc_title=row.get("doc_title") or "",
                text=row.get("text") or "",
                similarity=similarity
            ))

        # sorted() is stable: equal scores keep retrieval order
        ranked = sorted(scored, key=lambda c: c.similarity, reverse=True)[:self.max_candidates]
        logger.info(f"Kept {len(ranked)} of {len(scored)} matching fragments")
        return ranked

    def _get_fragments_pipeline(self) -> List[dict]:
        """Join chunks to their parent document and keep the configured collection."""
        return [
            {
                "$lookup": {
                    "from": self.documents_collection,
                    "localField": "doc_id",
                    "foreignField": "id",
                    "as": "document"
                }
            },
            {"$unwind": "$document"},
            {"$match": {"document.collection_id": self.collection_id}},
            {
                "$project": {
                    "_id": 0,
                    "doc_id": 1,
                    "doc_title": "$document.title",
                    "text": 1
                }
            }
        ]

    def _fetch_rows(self) -> List[dict]:
        try:
            return list(self.chunks.aggregate(self._get_fragments_pipeline()))
        except PyMongoError as e:
            logger.error(f"Failed to fetch fragments for collection {self.collection_id}: {e}")
            raise
