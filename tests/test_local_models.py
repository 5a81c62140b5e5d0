"""Tests for local model loading and device fallback."""

from unittest.mock import MagicMock

import numpy as np
import pytest

from docqa.config import Settings
from docqa.models import GenerationParams
from docqa.rag import local_models
from docqa.rag.local_models import LocalEmbeddingClient, LocalGenerator, candidate_devices


class TestCandidateDevices:
    def test_explicit_device_falls_back_to_cpu(self):
        assert candidate_devices("cuda") == ["cuda", "cpu"]
        assert candidate_devices("cpu") == ["cpu"]

    def test_auto_prefers_cuda(self, monkeypatch):
        monkeypatch.setattr(local_models.torch.cuda, "is_available", lambda: True)
        assert candidate_devices("auto") == ["cuda", "cpu"]

    def test_auto_without_accelerator(self, monkeypatch):
        monkeypatch.setattr(local_models.torch.cuda, "is_available", lambda: False)
        monkeypatch.setattr(local_models.torch.backends.mps, "is_available", lambda: False)
        assert candidate_devices("auto") == ["cpu"]


class TestLocalEmbeddingClient:
    """Test suite for the sentence-transformers wrapper."""

    @pytest.mark.asyncio
    async def test_retries_on_cpu(self, monkeypatch):
        model = MagicMock()
        model.get_sentence_embedding_dimension.return_value = 8
        devices = []

        def fake_sentence_transformer(name, device):
            devices.append(device)
            if device == "cuda":
                raise RuntimeError("CUDA out of memory")
            return model

        monkeypatch.setattr(local_models, "SentenceTransformer", fake_sentence_transformer)
        client = LocalEmbeddingClient(Settings(model_device="cuda"))

        await client.load()

        assert devices == ["cuda", "cpu"]
        assert client.device == "cpu"
        assert client.dimension == 8

    @pytest.mark.asyncio
    async def test_load_fails_when_every_device_fails(self, monkeypatch):
        def broken(name, device):
            raise OSError("model not found")

        monkeypatch.setattr(local_models, "SentenceTransformer", broken)
        client = LocalEmbeddingClient(Settings(model_device="cpu"))

        with pytest.raises(RuntimeError, match="Could not load embedding model"):
            await client.load()

    @pytest.mark.asyncio
    async def test_embed_requests_normalized_mean_vector(self, monkeypatch):
        model = MagicMock()
        model.get_sentence_embedding_dimension.return_value = 2
        model.encode.return_value = np.array([0.6, 0.8])
        monkeypatch.setattr(local_models, "SentenceTransformer", lambda name, device: model)
        client = LocalEmbeddingClient(Settings(model_device="cpu"))
        await client.load()

        vector = await client.embed("hello")

        assert vector == pytest.approx([0.6, 0.8])
        assert model.encode.call_args.kwargs["normalize_embeddings"] is True
        with pytest.raises(ValueError):
            await client.embed("hello", pooling="cls")


class TestLocalGenerator:
    @pytest.mark.asyncio
    async def test_greedy_generation_kwargs(self, monkeypatch):
        pipe = MagicMock(return_value=[{"generated_text": "prompt answer"}])
        monkeypatch.setattr(local_models, "pipeline", lambda task, model, device: pipe)
        generator = LocalGenerator(Settings(model_device="cpu"))
        await generator.load()

        text = await generator.generate("prompt", GenerationParams())

        assert text == "prompt answer"
        kwargs = pipe.call_args.kwargs
        assert kwargs["max_new_tokens"] == 150
        assert kwargs["do_sample"] is False
        assert "temperature" not in kwargs

    @pytest.mark.asyncio
    async def test_generate_before_load_raises(self):
        generator = LocalGenerator(Settings())
        with pytest.raises(RuntimeError):
            await generator.generate("prompt", GenerationParams())
