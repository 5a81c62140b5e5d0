"""Post-generation grounding checks for generated answers."""

import logging
import re
from typing import Optional

from docqa.config import Settings

logger = logging.getLogger(__name__)

ANSWER_LABELS = re.compile(
    r"^(Answer:|Response:|Based on the context:)", re.IGNORECASE
)


class GroundingValidator:
    """
    Decides whether a generated answer stays within the retrieved context.

    An answer is rejected when it contains hedging language that suggests
    the model fell back on general knowledge, or when too few of its
    significant words appear in the context. The validator only cleans and
    judges; it never writes replacement text.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.markers = [
            re.compile(pattern, re.IGNORECASE)
            for pattern in settings.hallucination_markers
        ]

    def clean(self, raw_answer: str, prompt: str) -> str:
        """Remove an echoed prompt and leading answer labels."""
        answer = raw_answer.replace(prompt, "", 1).strip() if prompt else raw_answer.strip()
        return ANSWER_LABELS.sub("", answer).strip()

    def find_hallucination_marker(self, answer: str) -> Optional[str]:
        """Return the first matched marker text, or None."""
        for marker in self.markers:
            match = marker.search(answer)
            if match:
                return match.group(0)
        return None

    def grounding_ratio(self, answer: str, context: str) -> Optional[float]:
        """
        Fraction of the answer's leading significant words found in context.

        Args:
            answer: Cleaned answer text
            context: Retrieved context the answer should draw from

        Returns:
            Ratio in [0, 1], or None when the answer has no significant words
        """
        min_len = self.settings.grounding_min_token_length
        window = self.settings.grounding_window
        answer_words = [w for w in answer.lower().split() if len(w) >= min_len]
        if not answer_words:
            return None
        context_words = set(context.lower().split())
        checked = answer_words[:window]
        grounded = sum(1 for w in checked if w in context_words)
        return grounded / min(len(answer_words), window)

    def validate(
        self, raw_answer: str, prompt: str, context: str, query: str
    ) -> Optional[str]:
        """
        Clean a raw generation and accept or reject it.

        Args:
            raw_answer: Text returned by the generation provider
            prompt: Prompt that produced it (stripped if echoed back)
            context: Retrieved context the prompt embedded
            query: User question

        Returns:
            The cleaned answer if accepted, otherwise None
        """
        answer = self.clean(raw_answer or "", prompt)

        marker = self.find_hallucination_marker(answer)
        if marker:
            logger.warning(
                f"Potential hallucination detected ('{marker}') for query '{query[:50]}'"
            )
            return None

        ratio = self.grounding_ratio(answer, context)
        if ratio is not None and ratio < self.settings.grounding_ratio:
            logger.warning(f"Low grounding detected (ratio {ratio:.2f})")
            return None

        if len(answer) < self.settings.min_answer_length:
            logger.info("Generated answer too short, rejecting")
            return None

        return answer
