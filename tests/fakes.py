"""Provider doubles that run the pipeline without model downloads."""

import re
from typing import Dict, List, Optional

from docqa.models import GenerationParams
from docqa.rag.embeddings import EmbeddingClient, l2_normalize
from docqa.rag.generator import GeneratorClient


class FakeEmbedder(EmbeddingClient):
    """Bag-of-words embedder with a collision-free growing vocabulary."""

    def __init__(self, dimension: int = 128, fail_on: Optional[List[str]] = None):
        super().__init__(dimension)
        self.vocab: Dict[str, int] = {}
        self.fail_on = fail_on or []
        self.calls: List[str] = []
        self.loaded = False

    async def load(self) -> None:
        self.loaded = True

    async def embed(self, text, pooling="mean", normalize=True):
        self.calls.append(text)
        if any(marker in text for marker in self.fail_on):
            raise RuntimeError(f"embedding failed for {text[:20]}")
        vector = [0.0] * self.dimension
        for word in re.findall(r"[a-z0-9]+", text.lower()):
            slot = self.vocab.setdefault(word, len(self.vocab) % self.dimension)
            vector[slot] += 1.0
        return l2_normalize(vector) if normalize else vector


class ScriptedGenerator(GeneratorClient):
    """Returns a fixed response (or raises) and records prompts."""

    def __init__(self, response=None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.prompts: List[str] = []
        self.params: List[GenerationParams] = []
        self.loaded = False

    async def load(self) -> None:
        self.loaded = True

    async def generate(self, prompt, params):
        self.prompts.append(prompt)
        self.params.append(params)
        if self.error is not None:
            raise self.error
        if callable(self.response):
            return self.response(prompt)
        return self.response
