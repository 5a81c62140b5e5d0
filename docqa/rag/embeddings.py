"""Embedding client interface and the absent-provider variant.

Concrete backends live in local_models.py and watsonx_client.py and are
selected by providers.create_embedding_client.
"""

from abc import ABC, abstractmethod
from typing import List

import numpy as np


def l2_normalize(vector) -> List[float]:
    """Scale a vector to unit length; zero vectors are returned unchanged."""
    arr = np.asarray(vector, dtype=np.float32).reshape(-1)
    norm = float(np.linalg.norm(arr))
    if norm == 0.0:
        return arr.tolist()
    return (arr / norm).tolist()


class EmbeddingClient(ABC):
    """Capability to turn text into a fixed-length vector.

    Subclasses implement load() and embed(). A client with available set to
    False is never asked to embed; retrieval goes lexical instead.
    """

    available = True

    def __init__(self, dimension: int = 384):
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    async def load(self) -> None:
        """Prepare the underlying model. Raises on failure."""

    @abstractmethod
    async def embed(
        self, text: str, pooling: str = "mean", normalize: bool = True
    ) -> List[float]:
        """Return the vector for text."""


class NullEmbeddingClient(EmbeddingClient):
    """No embedding model configured."""

    available = False

    async def embed(
        self, text: str, pooling: str = "mean", normalize: bool = True
    ) -> List[float]:
        raise RuntimeError("No embedding model configured")
