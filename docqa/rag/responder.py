"""Extractive answers built directly from retrieved text."""

from typing import List

from docqa.config import Settings
from docqa.rag.chunker import split_sentences
from docqa.rag.keyword_search import query_terms

NOT_FOUND_MESSAGE = (
    "I cannot find information about this topic in the document. "
    "Please ask about topics that are covered in the knowledge base."
)

QUESTION_WORDS = ("what", "how", "why", "when")


class ExtractiveResponder:
    """Picks the retrieved sentence that best matches the query."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def score_sentence(self, sentence: str, terms: List[str]) -> float:
        sentence_lower = sentence.lower()
        score = float(sum(1 for term in terms if term in sentence_lower))
        # explanatory sentences tend to answer questions
        if any(word in sentence_lower for word in QUESTION_WORDS):
            score += 0.5
        return score

    def respond(self, query: str, relevant_chunks: List[str]) -> str:
        """Return a non-empty answer drawn from relevant_chunks."""
        if not relevant_chunks:
            return NOT_FOUND_MESSAGE

        terms = query_terms(query, self.settings.min_query_token_length)
        best_match = ""
        highest = 0.0

        for chunk in relevant_chunks:
            for sentence in split_sentences(chunk):
                if len(sentence.strip()) <= 20:
                    continue
                score = self.score_sentence(sentence, terms)
                if score > highest:
                    highest = score
                    best_match = sentence.strip()

        if best_match and highest > 0:
            return f"Based on the document: {best_match}."

        first = relevant_chunks[0]
        limit = self.settings.excerpt_length
        excerpt = first[:limit] + "..." if len(first) > limit else first
        if not excerpt.strip():
            return NOT_FOUND_MESSAGE
        return f"According to the document: {excerpt}"
