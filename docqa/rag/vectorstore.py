"""In-memory embedding index over a session's chunks."""

import logging
from typing import Callable, List, Optional

import numpy as np

from docqa.rag.embeddings import EmbeddingClient

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def cosine_similarity(a, b) -> float:
    """Cosine similarity of two vectors.

    Returns 0.0 when the vectors differ in length or either has zero norm.
    The result is clipped into [-1, 1].
    """
    va = np.asarray(a, dtype=np.float64).reshape(-1)
    vb = np.asarray(b, dtype=np.float64).reshape(-1)
    if va.shape != vb.shape:
        return 0.0
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    sim = float(np.dot(va, vb) / (norm_a * norm_b))
    return max(-1.0, min(1.0, sim))


class EmbeddingIndex:
    """One vector per chunk, aligned by position.

    A chunk whose embedding fails gets a zero vector, so the index always
    has exactly one entry per chunk once precompute() returns.
    """

    def __init__(self, client: EmbeddingClient):
        self.client = client
        self.vectors: List[List[float]] = []

    def __len__(self) -> int:
        return len(self.vectors)

    async def precompute(
        self,
        chunks: List[str],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[List[float]]:
        """Embed every chunk sequentially.

        Args:
            chunks: Chunk texts, in session order.
            progress_callback: Optional callable receiving (done, total).

        Returns:
            The computed vectors (also stored on the index).
        """
        vectors: List[List[float]] = []
        total = len(chunks)

        for i, chunk in enumerate(chunks):
            try:
                vector = await self.client.embed(chunk, pooling="mean", normalize=True)
                vectors.append(list(vector))
            except Exception as e:
                logger.warning(f"Error computing embedding for chunk {i}: {e}")
                vectors.append([0.0] * self.client.dimension)

            if (i + 1) % 10 == 0:
                logger.info(f"Computed embeddings for {i + 1}/{total} chunks")
            if progress_callback is not None:
                progress_callback(i + 1, total)

        self.vectors = vectors
        logger.info(f"Computed embeddings for all {total} chunks")
        return vectors

    def similarities(self, query_vector: List[float]) -> List[float]:
        """Cosine similarity of the query against every indexed vector."""
        return [cosine_similarity(query_vector, v) for v in self.vectors]
