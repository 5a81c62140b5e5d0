"""Hybrid retrieval: semantic similarity with lexical boosting.

Retrieval tries an ordered list of strategies. Each returns a list of chunks
or None when it cannot run; the first non-None result wins. The semantic
strategy returning an empty list is a real answer ("nothing relevant"),
not a failure.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from docqa.config import Settings
from docqa.errors import RetrievalError
from docqa.models import ScoredCandidate
from docqa.rag.embeddings import EmbeddingClient
from docqa.rag.keyword_search import keyword_search, query_terms
from docqa.rag.vectorstore import EmbeddingIndex

logger = logging.getLogger(__name__)

Strategy = Callable[[str, int], Awaitable[Optional[List[str]]]]


class HybridRetriever:
    """Ranks session chunks against a query.

    Semantic path: cosine similarity of query and chunk embeddings plus a
    fixed boost per distinct query term found literally in the chunk. Chunks
    whose raw similarity is below the relevance threshold are discarded
    before ranking, so the boost can never lift an unrelated chunk.

    Lexical path: keyword occurrence counting, used when no embedding model
    is available or the semantic path fails.
    """

    def __init__(
        self,
        chunks: List[str],
        index: EmbeddingIndex,
        client: EmbeddingClient,
        settings: Settings,
    ):
        self.chunks = chunks
        self.index = index
        self.client = client
        self.settings = settings
        self.strategies: List[Strategy] = [self.semantic_search, self.lexical_search]

    async def retrieve(self, query: str, top_k: Optional[int] = None) -> List[str]:
        """Return up to top_k chunk texts, most relevant first."""
        if top_k is None:
            top_k = self.settings.top_k
        for strategy in self.strategies:
            result = await strategy(query, top_k)
            if result is not None:
                return result
        return []

    def semantic_ready(self) -> bool:
        return self.client.available and len(self.index) > 0

    async def semantic_search(self, query: str, top_k: int) -> Optional[List[str]]:
        if not self.semantic_ready():
            logger.info("Using fallback keyword search")
            return None
        try:
            candidates = await self.score_candidates(query)
        except RetrievalError as e:
            logger.warning(f"Error in semantic search, falling back to keyword search: {e}")
            return None

        threshold = self.settings.relevance_threshold
        relevant = [c for c in candidates if c.similarity >= threshold]
        # stable sort: equal combined scores keep chunk order
        ranked = sorted(relevant, key=lambda c: c.combined_score, reverse=True)[:top_k]
        for c in ranked:
            logger.debug(
                f"Chunk {c.index} similarity: {c.similarity:.3f} "
                f"(boosted: {c.combined_score:.3f})"
            )
        logger.info(f"Found {len(ranked)} relevant chunks using semantic search")
        return [c.chunk for c in ranked]

    async def lexical_search(self, query: str, top_k: int) -> Optional[List[str]]:
        return keyword_search(
            self.chunks, query, top_k, self.settings.min_query_token_length
        )

    def term_boost(self, chunk: str, terms: List[str]) -> float:
        chunk_lower = chunk.lower()
        hits = sum(1 for term in terms if term in chunk_lower)
        return self.settings.term_boost * hits

    async def score_candidates(self, query: str) -> List[ScoredCandidate]:
        """Score every chunk against the query.

        Raises:
            RetrievalError: If the query embedding or scoring fails.
        """
        try:
            query_vector = await self.client.embed(query, pooling="mean", normalize=True)
            similarities = self.index.similarities(query_vector)
            terms = list(
                dict.fromkeys(query_terms(query, self.settings.min_query_token_length))
            )
            candidates = []
            for i, (chunk, sim) in enumerate(zip(self.chunks, similarities)):
                boost = self.term_boost(chunk, terms)
                candidates.append(
                    ScoredCandidate(
                        index=i,
                        chunk=chunk,
                        similarity=sim,
                        lexical_boost=boost,
                        combined_score=sim + boost,
                    )
                )
        except Exception as e:
            raise RetrievalError(str(e)) from e
        return candidates
