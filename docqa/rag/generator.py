"""Generation client interface, prompt construction and output parsing."""

from abc import ABC, abstractmethod
from typing import Any

from docqa.models import GenerationParams

SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions ONLY based on the "
    "provided context."
)

GROUNDING_RULES = (
    "IMPORTANT RULES:\n"
    "1. ONLY use information from the provided context\n"
    '2. If the answer is not in the context, say "I cannot find this '
    'information in the document"\n'
    "3. Do not make assumptions or add information not in the context\n"
    "4. Be direct and specific in your answers"
)


def build_prompt(context: str, query: str) -> str:
    """Embed context and question in the grounding instructions."""
    return (
        f"{SYSTEM_PROMPT}\n\n{GROUNDING_RULES}\n\n"
        f"Context from document:\n{context}\n\n"
        f"Question: {query}\n\n"
        "Answer based ONLY on the context above:"
    )


def extract_generated_text(response: Any) -> str:
    """Pull the generated text out of a provider response.

    Accepts a plain string, a list of {"generated_text": ...} dicts (the
    transformers pipeline shape), a dict with "generated_text", or a
    watsonx {"results": [{"generated_text": ...}]} payload.
    """
    data = response.get_result() if hasattr(response, "get_result") else response
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    if isinstance(data, list):
        if not data:
            return ""
        return extract_generated_text(data[0])
    if isinstance(data, dict):
        if data.get("results"):
            return data["results"][0].get("generated_text", "") or ""
        return data.get("generated_text", "") or ""
    if hasattr(data, "generated_text"):
        return data.generated_text or ""
    return str(data)


class GeneratorClient(ABC):
    """Capability to continue a prompt.

    A generator with available set to False is never called; answers come
    from the extractive responder instead.
    """

    available = True

    async def load(self) -> None:
        """Prepare the underlying model. Raises on failure."""

    @abstractmethod
    async def generate(self, prompt: str, params: GenerationParams) -> str:
        """Return the text generated for prompt."""


class NullGenerator(GeneratorClient):
    """No generation model configured."""

    available = False

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        raise RuntimeError("No generation model configured")
