"""Data models shared by candidate retrieval and reranking."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Upper bound on candidates kept after lexical scoring and fed to a reranker
MAX_CANDIDATES = 50


class RerankerProvider(str, Enum):
    BGE = "bge"
    LLM = "llm"
    NONE = "none"


class Candidate(BaseModel):
    """Document fragment eligible for ranking."""
    doc_id: str = Field(description="Identifier of the parent document")
    doc_title: str = Field(default="", description="Title of the parent document")
    text: str = Field(default="", description="Fragment text")
    similarity: float = Field(default=0.0, description="Lexical score against the query")
    rerank_score: Optional[float] = Field(default=None, description="Score assigned by the reranker")
    rerank_provider: Optional[RerankerProvider] = Field(
        default=None, description="Provider that produced rerank_score")
    original_similarity: Optional[float] = Field(
        default=None, description="Lexical score the candidate had before reranking")


class QuerySpec(BaseModel):
    """Query text with the document ids considered relevant for it."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    query: str = Field(min_length=1, description="Free-text query")
    relevant_doc_ids: List[str] = Field(
        default_factory=list,
        alias="relevantDocIds",
        description="Ground-truth relevant document ids"
    )
