"""Console runner for the document question-answering assistant.

Loads a PDF (or the built-in sample FAQ), prepares a QueryPipeline with the
configured model backend, and answers questions from the command line or
standard input.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from docqa.config import Settings
from docqa.errors import InitializationError
from docqa.rag.chunker import chunk_text
from docqa.rag.pdf_extractor import FALLBACK_TEXT, extract_text
from docqa.rag.pipeline import QueryPipeline
from docqa.rag.providers import create_providers

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    """Load application settings.

    Returns:
        Settings instance loaded from environment variables.
    """
    load_dotenv()
    return Settings.from_env()


def load_chunks(settings: Settings, source: Optional[str]) -> List[str]:
    text = extract_text(source) if source else FALLBACK_TEXT
    return chunk_text(
        text,
        chunk_size=settings.chunk_size,
        chunk_overlap=settings.chunk_overlap,
        overlap_divisor=settings.overlap_divisor,
        max_overlap_words=settings.max_overlap_words,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ask questions about a PDF document."
    )
    parser.add_argument(
        "source", nargs="?", help="Path to a PDF file (defaults to a sample FAQ)"
    )
    parser.add_argument(
        "-q",
        "--question",
        action="append",
        default=[],
        help="Question to answer; may be repeated. Reads stdin when omitted.",
    )
    return parser.parse_args(argv)


def print_answer(answer: str) -> None:
    # one answer per output line
    print(" ".join(answer.split()))


async def run(settings: Settings, source: Optional[str], questions: List[str]) -> int:
    chunks = load_chunks(settings, source)
    logger.info(f"Loaded {len(chunks)} chunks from {source or 'sample FAQ'}")
    embedder, generator = create_providers(settings)
    pipeline = QueryPipeline(settings, embedder, generator)

    try:
        await pipeline.initialize(chunks)
    except InitializationError as e:
        print(e.user_message, file=sys.stderr)
        return 1

    if questions:
        for question in questions:
            print_answer(await pipeline.generate_response(question))
        return 0

    for line in sys.stdin:
        question = line.strip()
        if not question:
            break
        print_answer(await pipeline.generate_response(question))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the console runner."""
    args = parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(settings, args.source, args.question))


if __name__ == "__main__":
    sys.exit(main())
