"""Exceptions raised by the question-answering pipeline.

Only InitializationError and UninitializedError leave QueryPipeline;
the others are absorbed by its fallback chain.
"""

INITIALIZATION_FAILED_MESSAGE = (
    "The assistant could not be started. Please reload and try again."
)
UNINITIALIZED_MESSAGE = (
    "The assistant is not ready yet. Please wait for the document to load."
)


class DocQAError(Exception):
    """Base class for pipeline errors."""


class InitializationError(DocQAError):
    """Model providers or the embedding index could not be set up."""

    user_message = INITIALIZATION_FAILED_MESSAGE


class UninitializedError(DocQAError):
    """A query was issued before the session reached the ready state."""

    user_message = UNINITIALIZED_MESSAGE


class RetrievalError(DocQAError):
    """Query embedding or similarity scoring failed."""


class GenerationError(DocQAError):
    """The generation provider failed or returned unusable output."""
