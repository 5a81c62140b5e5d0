"""Application configuration settings.

This module defines the Settings dataclass that loads configuration
from environment variables.
"""

from dataclasses import dataclass
import os

DEFAULT_HALLUCINATION_MARKERS: tuple[str, ...] = (
    # first-person belief
    r"I think",
    r"I believe",
    r"probably",
    r"likely",
    r"might be",
    r"could be",
    # generality
    r"in general",
    r"typically",
    r"usually",
    r"often",
    # meta-knowledge
    r"from my knowledge",
    r"as far as I know",
)


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        model_backend: Provider backend, one of "local", "watsonx" or "none".
        enable_generation: Whether a text-generation provider is configured.
        model_device: Device for local models ("auto", "cuda", "mps", "cpu").
        local_embed_model: sentence-transformers model ID.
        local_gen_model: transformers text-generation model ID.
        ibm_cloud_api_key: IBM Cloud API key for authentication.
        watsonx_region: Watsonx.ai service region.
        watsonx_project_id: Watsonx.ai project ID.
        watsonx_embed_model: Embedding model ID.
        watsonx_gen_model: Generation model ID.
        embedding_dim: Embedding dimension used for zero-vector substitution.
        chunk_size: Target chunk size in characters.
        chunk_overlap: Overlap setting; divided by overlap_divisor to get words.
        overlap_divisor: Scaling applied to chunk_overlap.
        max_overlap_words: Upper bound on carried-over words.
        top_k: Number of chunks retrieved per query.
        fallback_top_k: Number of chunks re-retrieved after an early failure.
        relevance_threshold: Minimum raw cosine similarity for a chunk.
        term_boost: Score added per distinct query term found in a chunk.
        min_query_token_length: Query tokens shorter than this are ignored.
        grounding_ratio: Minimum fraction of answer terms found in context.
        grounding_window: Number of leading answer terms checked.
        grounding_min_token_length: Answer tokens shorter than this are ignored.
        min_answer_length: Minimum length of an accepted generated answer.
        hallucination_markers: Regex patterns that reject a generated answer.
        max_length: Maximum generated tokens.
        temperature: Generation temperature.
        do_sample: Whether generation samples (False means greedy decoding).
        repetition_penalty: Generation repetition penalty.
        excerpt_length: Length of the raw excerpt fallback answer.
        log_level: Logging level for the entry point.
    """

    model_backend: str = "local"
    enable_generation: bool = True
    model_device: str = "auto"
    local_embed_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    local_gen_model: str = "microsoft/phi-1_5"

    ibm_cloud_api_key: str = ""
    watsonx_region: str = "us-south"
    watsonx_project_id: str = ""
    watsonx_embed_model: str = "ibm/slate-30m-english-rtrvr"
    watsonx_gen_model: str = "ibm/granite-13b-instruct-v2"

    embedding_dim: int = 384

    chunk_size: int = 500
    chunk_overlap: int = 50
    overlap_divisor: int = 10
    max_overlap_words: int = 10

    top_k: int = 3
    fallback_top_k: int = 2
    relevance_threshold: float = 0.2
    term_boost: float = 0.1
    min_query_token_length: int = 3

    grounding_ratio: float = 0.3
    grounding_window: int = 10
    grounding_min_token_length: int = 4
    min_answer_length: int = 10
    hallucination_markers: tuple[str, ...] = DEFAULT_HALLUCINATION_MARKERS

    max_length: int = 150
    temperature: float = 0.1
    do_sample: bool = False
    repetition_penalty: float = 1.1

    excerpt_length: int = 200
    log_level: str = "INFO"

    @staticmethod
    def _get_bool(value: str | None, default: bool = False) -> bool:
        """Convert string value to boolean.

        Args:
            value: String value to convert.
            default: Default value if value is None.

        Returns:
            Boolean value.
        """
        if value is None:
            return default
        return value.lower() in {"1", "true", "t", "yes", "y"}

    @staticmethod
    def _get_markers(value: str | None) -> tuple[str, ...]:
        if not value:
            return DEFAULT_HALLUCINATION_MARKERS
        return tuple(m.strip() for m in value.split(",") if m.strip())

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings instance from environment variables.

        Returns:
            Settings instance with values loaded from environment.
        """
        return cls(
            model_backend=os.getenv("MODEL_BACKEND", "local").lower(),
            enable_generation=cls._get_bool(os.getenv("ENABLE_GENERATION"), True),
            model_device=os.getenv("MODEL_DEVICE", "auto").lower(),
            local_embed_model=os.getenv(
                "LOCAL_EMBED_MODEL", "sentence-transformers/all-MiniLM-L6-v2"
            ),
            local_gen_model=os.getenv("LOCAL_GEN_MODEL", "microsoft/phi-1_5"),
            ibm_cloud_api_key=os.getenv("IBM_CLOUD_API_KEY", ""),
            watsonx_region=os.getenv("WATSONX_REGION", "us-south"),
            watsonx_project_id=os.getenv("WATSONX_PROJECT_ID", ""),
            watsonx_embed_model=os.getenv(
                "WATSONX_EMBED_MODEL", "ibm/slate-30m-english-rtrvr"
            ),
            watsonx_gen_model=os.getenv(
                "WATSONX_GEN_MODEL", "ibm/granite-13b-instruct-v2"
            ),
            embedding_dim=int(os.getenv("EMBEDDING_DIM", "384")),
            chunk_size=int(os.getenv("CHUNK_SIZE", "500")),
            chunk_overlap=int(os.getenv("CHUNK_OVERLAP", "50")),
            overlap_divisor=int(os.getenv("OVERLAP_DIVISOR", "10")),
            max_overlap_words=int(os.getenv("MAX_OVERLAP_WORDS", "10")),
            top_k=int(os.getenv("TOP_K", "3")),
            fallback_top_k=int(os.getenv("FALLBACK_TOP_K", "2")),
            relevance_threshold=float(os.getenv("RELEVANCE_THRESHOLD", "0.2")),
            term_boost=float(os.getenv("TERM_BOOST", "0.1")),
            min_query_token_length=int(os.getenv("MIN_QUERY_TOKEN_LENGTH", "3")),
            grounding_ratio=float(os.getenv("GROUNDING_RATIO", "0.3")),
            grounding_window=int(os.getenv("GROUNDING_WINDOW", "10")),
            grounding_min_token_length=int(
                os.getenv("GROUNDING_MIN_TOKEN_LENGTH", "4")
            ),
            min_answer_length=int(os.getenv("MIN_ANSWER_LENGTH", "10")),
            hallucination_markers=cls._get_markers(os.getenv("HALLUCINATION_MARKERS")),
            max_length=int(os.getenv("MAX_LENGTH", "150")),
            temperature=float(os.getenv("TEMPERATURE", "0.1")),
            do_sample=cls._get_bool(os.getenv("DO_SAMPLE"), False),
            repetition_penalty=float(os.getenv("REPETITION_PENALTY", "1.1")),
            excerpt_length=int(os.getenv("EXCERPT_LENGTH", "200")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
