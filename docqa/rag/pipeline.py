"""Question-answering pipeline over a single document.

This module provides the QueryPipeline class, which owns the session
lifecycle (chunks and embeddings are set once per document) and turns a
question into a grounded answer.
"""

import logging
from typing import Awaitable, Callable, List, Optional, Tuple

from docqa.config import Settings
from docqa.errors import GenerationError, InitializationError, UninitializedError
from docqa.models import GenerationParams, QueryResult, SessionState
from docqa.rag.embeddings import EmbeddingClient, NullEmbeddingClient
from docqa.rag.generator import (
    GeneratorClient,
    NullGenerator,
    build_prompt,
    extract_generated_text,
)
from docqa.rag.responder import NOT_FOUND_MESSAGE, ExtractiveResponder
from docqa.rag.retriever import HybridRetriever
from docqa.rag.vectorstore import EmbeddingIndex, ProgressCallback
from docqa.rag.verifier import GroundingValidator

logger = logging.getLogger(__name__)

NO_RELEVANT_INFO_MESSAGE = (
    "I couldn't find relevant information in the knowledge base to answer "
    "your question. Please try asking about topics that are covered in the "
    "document."
)

AnswerStrategy = Callable[[str, List[str]], Awaitable[Optional[str]]]


class QueryPipeline:
    """Answers questions about one document.

    Answering runs retrieval, then tries each answer strategy in order
    (generative, then extractive) until one returns text. The extractive
    strategy always does, and any unexpected error still resolves to a
    message, so a ready pipeline never raises from generate_response.
    """

    def __init__(
        self,
        settings: Settings,
        embedder: Optional[EmbeddingClient] = None,
        generator: Optional[GeneratorClient] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Application settings.
            embedder: Embedding client; None means no embedding model.
            generator: Generation client; None means no generation model.
        """
        self.settings = settings
        self.embedder = embedder or NullEmbeddingClient(settings.embedding_dim)
        self.generator = generator or NullGenerator()
        self.validator = GroundingValidator(settings)
        self.responder = ExtractiveResponder(settings)
        self.index = EmbeddingIndex(self.embedder)
        self._chunks: Tuple[str, ...] = ()
        self._state = SessionState.UNINITIALIZED
        self._retriever: Optional[HybridRetriever] = None
        self.strategies: List[Tuple[str, AnswerStrategy]] = [
            ("generative", self._generative_answer),
            ("extractive", self._extractive_answer),
        ]

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def chunks(self) -> Tuple[str, ...]:
        return self._chunks

    @property
    def embeddings(self) -> List[List[float]]:
        return self.index.vectors

    @property
    def generation_params(self) -> GenerationParams:
        return GenerationParams(
            max_length=self.settings.max_length,
            temperature=self.settings.temperature,
            do_sample=self.settings.do_sample,
            repetition_penalty=self.settings.repetition_penalty,
        )

    async def initialize(
        self,
        chunks: List[str],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        """Load models and embed the document's chunks.

        Does nothing if the session is already ready. A failed attempt leaves
        the session in the failed state; calling initialize again retries.

        Args:
            chunks: Document chunks, in order.
            progress_callback: Optional callable receiving (done, total).

        Raises:
            InitializationError: If a provider cannot be loaded or the index
                cannot be built.
        """
        if self._state == SessionState.READY:
            return

        self._state = SessionState.INITIALIZING
        logger.info("Initializing AI models...")
        try:
            self._chunks = tuple(chunks)
            if self.embedder.available:
                logger.info("Loading embedding model...")
                await self.embedder.load()
            if self.generator.available:
                logger.info("Loading text generation model...")
                await self.generator.load()

            if self.embedder.available:
                logger.info("Computing embeddings for document chunks...")
                await self.index.precompute(list(self._chunks), progress_callback)

            self._retriever = HybridRetriever(
                list(self._chunks), self.index, self.embedder, self.settings
            )
        except Exception as e:
            self._state = SessionState.FAILED
            logger.error(f"Failed to initialize AI models: {e}")
            raise InitializationError(str(e)) from e

        self._state = SessionState.READY
        logger.info(f"AI models initialized successfully ({len(self._chunks)} chunks)")

    async def retrieve(self, query: str, top_k: Optional[int] = None) -> List[str]:
        self._require_ready()
        return await self._retriever.retrieve(query, top_k)

    def build_prompt(self, context: str, query: str) -> str:
        return build_prompt(context, query)

    async def generate_response(self, query: str) -> str:
        """Answer a question with text grounded in the document.

        Raises:
            UninitializedError: If the session is not ready.
        """
        result = await self.answer(query)
        return result.answer

    async def answer(self, query: str) -> QueryResult:
        """Answer a question and report the context and strategy used.

        Raises:
            UninitializedError: If the session is not ready.
        """
        self._require_ready()
        logger.info(f"Generating response for query: {query[:80]}")

        relevant: Optional[List[str]] = None
        try:
            relevant = await self._retriever.retrieve(query, self.settings.top_k)
            if not relevant:
                return QueryResult(
                    answer=NO_RELEVANT_INFO_MESSAGE, sources=[], strategy="no_context"
                )

            for name, strategy in self.strategies:
                text = await strategy(query, relevant)
                if text:
                    return QueryResult(answer=text, sources=relevant, strategy=name)
        except Exception as e:
            logger.warning(f"Error generating response: {e}")

        return await self._recover(query, relevant)

    async def _recover(self, query: str, relevant: Optional[List[str]]) -> QueryResult:
        try:
            if relevant is None:
                relevant = await self._retriever.retrieve(
                    query, self.settings.fallback_top_k
                )
            text = self.responder.respond(query, relevant)
            strategy = "extractive" if relevant else "not_found"
            return QueryResult(answer=text, sources=relevant, strategy=strategy)
        except Exception as e:
            logger.error(f"Fallback response failed: {e}")
            return QueryResult(answer=NOT_FOUND_MESSAGE, sources=[], strategy="not_found")

    async def _generative_answer(self, query: str, relevant: List[str]) -> Optional[str]:
        if not self.generator.available:
            return None

        context = "\n\n".join(relevant)
        prompt = self.build_prompt(context, query)
        try:
            raw = await self._generate(prompt)
        except GenerationError as e:
            logger.warning(f"Generation failed, using extractive answer: {e}")
            return None

        answer = self.validator.validate(raw, prompt, context, query)
        if answer:
            logger.info("Generated grounded AI response")
        return answer

    async def _generate(self, prompt: str) -> str:
        try:
            response = await self.generator.generate(prompt, self.generation_params)
            return extract_generated_text(response)
        except Exception as e:
            raise GenerationError(str(e)) from e

    async def _extractive_answer(self, query: str, relevant: List[str]) -> Optional[str]:
        return self.responder.respond(query, relevant)

    def _require_ready(self) -> None:
        if self._state != SessionState.READY or self._retriever is None:
            raise UninitializedError("Chat service not initialized")
