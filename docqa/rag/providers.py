"""Select model providers from settings."""

import logging
from typing import Tuple

from docqa.config import Settings
from docqa.rag.embeddings import EmbeddingClient, NullEmbeddingClient
from docqa.rag.generator import GeneratorClient, NullGenerator

logger = logging.getLogger(__name__)

BACKENDS = ("local", "watsonx", "none")


def create_embedding_client(settings: Settings) -> EmbeddingClient:
    backend = settings.model_backend
    if backend == "local":
        from docqa.rag.local_models import LocalEmbeddingClient

        return LocalEmbeddingClient(settings)
    if backend == "watsonx":
        from docqa.rag.watsonx_client import WatsonxEmbeddingClient

        return WatsonxEmbeddingClient(settings)
    if backend == "none":
        return NullEmbeddingClient(settings.embedding_dim)
    raise ValueError(f"Unknown MODEL_BACKEND '{backend}', expected one of {BACKENDS}")


def create_generator(settings: Settings) -> GeneratorClient:
    backend = settings.model_backend
    if not settings.enable_generation or backend == "none":
        return NullGenerator()
    if backend == "local":
        from docqa.rag.local_models import LocalGenerator

        return LocalGenerator(settings)
    if backend == "watsonx":
        from docqa.rag.watsonx_client import WatsonxGenerator

        return WatsonxGenerator(settings)
    raise ValueError(f"Unknown MODEL_BACKEND '{backend}', expected one of {BACKENDS}")


def create_providers(settings: Settings) -> Tuple[EmbeddingClient, GeneratorClient]:
    """Build the embedding client and generator for the configured backend."""
    embedder = create_embedding_client(settings)
    generator = create_generator(settings)
    logger.info(
        f"Using {settings.model_backend} backend "
        f"(embeddings: {type(embedder).__name__}, generation: {type(generator).__name__})"
    )
    return embedder, generator
