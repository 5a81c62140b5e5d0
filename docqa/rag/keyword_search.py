"""Keyword scoring by raw term-occurrence counting.

Used both as the lexical boost source for hybrid retrieval and as the
standalone fallback ranker when embeddings are unavailable.
"""

import re
from typing import List


def query_terms(query: str, min_length: int = 3) -> List[str]:
    """Lowercased whitespace tokens of the query, keeping len >= min_length."""
    return [w for w in query.lower().split() if len(w) >= min_length]


def score(chunk: str, query: str, min_length: int = 3) -> int:
    """Count occurrences of every query term in the chunk.

    Matching is case-insensitive and literal; overlapping matches of the
    same term are not counted twice.
    """
    chunk_lower = chunk.lower()
    total = 0
    for term in query_terms(query, min_length):
        total += len(re.findall(re.escape(term), chunk_lower))
    return total


def keyword_search(
    chunks: List[str], query: str, top_k: int = 3, min_length: int = 3
) -> List[str]:
    """Rank chunks by keyword score.

    Args:
        chunks: Candidate chunk texts.
        query: User query.
        top_k: Maximum number of chunks to return.
        min_length: Minimum query token length.

    Returns:
        Chunks with a positive score, best first; ties keep chunk order.
    """
    scored = [(score(chunk, query, min_length), chunk) for chunk in chunks]
    hits = [item for item in scored if item[0] > 0]
    # sorted() is stable, so equal scores stay in document order
    hits = sorted(hits, key=lambda x: x[0], reverse=True)
    return [chunk for _, chunk in hits[:top_k]]
