"""Pytest fixtures for the docqa test suite."""

import pytest

from docqa.config import Settings
from fakes import FakeEmbedder


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings()


@pytest.fixture
def frantzland_chunks():
    return [
        "The capital of Frantzland is Sorimo.",
        "Sorimo has a population of two million.",
    ]


@pytest.fixture
def faq_chunks():
    return [
        "Q: What is this chatbot? A: This is an AI-powered chatbot that answers "
        "questions based on PDF documents using local language models.",
        "Q: Is my data secure? A: Everything runs locally on your machine and no "
        "data is sent to external servers.",
        "Q: What browsers are supported? A: Modern browsers that support "
        "WebAssembly are supported, including Chrome, Firefox, Safari and Edge.",
    ]


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()
