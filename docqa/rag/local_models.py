"""Local model backends using sentence-transformers and transformers.

Models are loaded on an accelerated device when one is available and
reloaded on CPU if that fails.
"""

import asyncio
import logging
from typing import List, Optional

import torch
from sentence_transformers import SentenceTransformer
from transformers import pipeline

from docqa.config import Settings
from docqa.models import GenerationParams
from docqa.rag.embeddings import EmbeddingClient
from docqa.rag.generator import GeneratorClient, extract_generated_text

logger = logging.getLogger(__name__)


def candidate_devices(preference: str = "auto") -> List[str]:
    """Devices to try in order; CPU is always the last resort."""
    if preference and preference != "auto":
        return [preference] if preference == "cpu" else [preference, "cpu"]
    devices = []
    if torch.cuda.is_available():
        devices.append("cuda")
    elif getattr(torch.backends, "mps", None) is not None and torch.backends.mps.is_available():
        devices.append("mps")
    devices.append("cpu")
    return devices


class LocalEmbeddingClient(EmbeddingClient):
    """
    Wrapper for a sentence-transformers embedding model.
    """

    def __init__(self, settings: Settings):
        super().__init__(settings.embedding_dim)
        self.settings = settings
        self.model_name = settings.local_embed_model
        self.model: Optional[SentenceTransformer] = None
        self.device: Optional[str] = None

    async def load(self) -> None:
        if self.model is not None:
            return
        last_error: Optional[Exception] = None
        for device in candidate_devices(self.settings.model_device):
            try:
                logger.info(f"[embedder] Loading model: {self.model_name} on {device}")
                self.model = await asyncio.to_thread(
                    SentenceTransformer, self.model_name, device=device
                )
                self.device = device
                self._dimension = (
                    self.model.get_sentence_embedding_dimension() or self._dimension
                )
                logger.info(f"[embedder] Model loaded, dimension: {self._dimension}")
                return
            except Exception as e:
                last_error = e
                logger.warning(f"[embedder] Failed to load on {device}: {e}")
        raise RuntimeError(
            f"Could not load embedding model {self.model_name}"
        ) from last_error

    async def embed(
        self, text: str, pooling: str = "mean", normalize: bool = True
    ) -> List[float]:
        if self.model is None:
            raise RuntimeError("Embedding model not loaded")
        if pooling != "mean":
            raise ValueError(f"Unsupported pooling mode: {pooling}")
        vector = await asyncio.to_thread(
            self.model.encode,
            text,
            convert_to_numpy=True,
            show_progress_bar=False,
            normalize_embeddings=normalize,
        )
        return vector.tolist()


class LocalGenerator(GeneratorClient):
    """transformers text-generation pipeline."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.model_name = settings.local_gen_model
        self.pipe = None
        self.device: Optional[str] = None

    async def load(self) -> None:
        if self.pipe is not None:
            return
        last_error: Optional[Exception] = None
        for device in candidate_devices(self.settings.model_device):
            try:
                logger.info(f"[generator] Loading model: {self.model_name} on {device}")
                self.pipe = await asyncio.to_thread(
                    pipeline, "text-generation", model=self.model_name, device=device
                )
                self.device = device
                return
            except Exception as e:
                last_error = e
                logger.warning(f"[generator] Failed to load on {device}: {e}")
        raise RuntimeError(
            f"Could not load generation model {self.model_name}"
        ) from last_error

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        if self.pipe is None:
            raise RuntimeError("Generation model not loaded")
        kwargs = {
            "max_new_tokens": params.max_length,
            "do_sample": params.do_sample,
            "repetition_penalty": params.repetition_penalty,
        }
        if params.do_sample:
            kwargs["temperature"] = params.temperature
        response = await asyncio.to_thread(self.pipe, prompt, **kwargs)
        return extract_generated_text(response)
