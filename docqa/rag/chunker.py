"""Text chunking utilities.

This module provides functions for splitting extracted document text into
overlapping chunks along sentence boundaries.
"""

import logging
import re
from typing import List

logger = logging.getLogger(__name__)

SENTENCE_DELIMITERS = re.compile(r"[.!?]+")


def split_sentences(text: str) -> List[str]:
    """Split text on sentence terminators, dropping empty pieces.

    The returned units are not trimmed; callers trim as they need.
    """
    return [s for s in SENTENCE_DELIMITERS.split(text) if s.strip()]


def overlap_word_count(
    chunk_overlap: int, overlap_divisor: int = 10, max_overlap_words: int = 10
) -> int:
    """Number of trailing words carried into the next chunk.

    Args:
        chunk_overlap: Overlap setting (50 carries 5 words by default).
        overlap_divisor: Scaling applied to chunk_overlap.
        max_overlap_words: Upper bound on the result.

    Returns:
        Word count, never negative.
    """
    if overlap_divisor <= 0:
        return 0
    return max(0, int(min(chunk_overlap / overlap_divisor, max_overlap_words)))


def chunk_text(
    text: str,
    chunk_size: int = 500,
    chunk_overlap: int = 50,
    overlap_divisor: int = 10,
    max_overlap_words: int = 10,
) -> List[str]:
    """Split text into chunks of roughly chunk_size characters.

    Sentences are accumulated greedily. When the next sentence would push a
    non-empty buffer past chunk_size, the buffer is emitted and the next
    chunk starts with the last few words of the emitted one.

    Args:
        text: Text to chunk.
        chunk_size: Target size for each chunk in characters.
        chunk_overlap: Overlap setting, see overlap_word_count.
        overlap_divisor: Scaling applied to chunk_overlap.
        max_overlap_words: Upper bound on carried-over words.

    Returns:
        List of text chunks.
    """
    carry = overlap_word_count(chunk_overlap, overlap_divisor, max_overlap_words)
    chunks: List[str] = []
    current = ""

    for sentence in split_sentences(text):
        sentence = sentence.strip()

        # +1 for the joining space
        if current and len(current) + 1 + len(sentence) > chunk_size:
            chunks.append(current.strip())
            words = current.split(" ")
            prefix = " ".join(words[-carry:]) if carry else ""
            current = f"{prefix} {sentence}" if prefix else sentence
        else:
            current += (" " if current else "") + sentence

    if current.strip():
        chunks.append(current.strip())

    logger.info(f"Text split into {len(chunks)} chunks")
    return chunks
