"""Data models for the question-answering pipeline.

This module defines Pydantic models for retrieval candidates, generation
parameters and query results, plus the session lifecycle states.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SessionState(str, Enum):
    """Lifecycle of a QueryPipeline session."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class ScoredCandidate(BaseModel):
    """A chunk scored against a query during hybrid retrieval.

    Attributes:
        index: Position of the chunk in the session's chunk list.
        chunk: Chunk text.
        similarity: Raw cosine similarity between query and chunk vectors.
        lexical_boost: Additive reward for literal query-term hits.
        combined_score: similarity + lexical_boost, used for ranking.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    chunk: str
    similarity: float
    lexical_boost: float
    combined_score: float


class GenerationParams(BaseModel):
    """Decoding parameters passed to a generation provider.

    Attributes:
        max_length: Maximum number of generated tokens.
        temperature: Sampling temperature.
        do_sample: False requests deterministic (greedy) decoding.
        repetition_penalty: Penalty applied to repeated tokens.
    """

    max_length: int = 150
    temperature: float = 0.1
    do_sample: bool = False
    repetition_penalty: float = 1.1


class QueryResult(BaseModel):
    """Answer with the context it was drawn from.

    Attributes:
        answer: Final, non-empty answer text.
        sources: Retrieved chunks the answer is grounded in.
        strategy: Stage that produced the answer ("no_context",
            "generative", "extractive" or "not_found").
    """

    answer: str
    sources: list[str]
    strategy: str
